"""HR Pro package.

Organized by feature modules (employees, departments, recruitment, ...)
with a thin Flask controller layer over service/repository layers.
"""
