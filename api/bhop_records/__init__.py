"""
bhop_records: sincronizacion de records de bunnyhop (SourceJump, FastDL, TAS)
hacia una base de datos local, con API de consulta.
"""
