"""
Cliente y parser de la tabla de descargas de FastDL.
"""
