"""
Modelos de base de datos (ORM).
"""
from sqlalchemy import Column, Float, ForeignKey, Integer, String

from bhop_records.infrastructure.database.session import Base


class ServerModel(Base):
    """
    Servidor de juego identificado por su hostname.
    Se crea al primer uso y nunca se modifica ni se borra.
    """

    __tablename__ = "servers"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, unique=True)

    def __repr__(self):
        return f"<Server(id={self.id}, name={self.name})>"


class MapModel(Base):
    """
    Modelo de base de datos para mapas.

    Una fila por nombre de mapa (clave natural, UNIQUE). Guarda:
    - WR: tiempo, runner, servidor y el ID del record en SourceJump
      (wr_source_record_id), usado solo para detectar cambios.
    - TAS: tiempo, runner y servidor, independientes del WR.
    - fastdl_hash: hash del archivo del mapa en el host FastDL.
    """

    __tablename__ = "maps"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    tier = Column(Integer, nullable=True)

    wr_time = Column(Float, nullable=True)
    wr_runner = Column(String(255), nullable=True)
    wr_source_record_id = Column(Integer, nullable=True)
    wr_server_id = Column(Integer, ForeignKey("servers.id"), nullable=True)

    tas_time = Column(Float, nullable=True)
    tas_runner = Column(String(255), nullable=True)
    tas_server_id = Column(Integer, ForeignKey("servers.id"), nullable=True)

    fastdl_hash = Column(String(128), nullable=True)

    def __repr__(self):
        return f"<Map(id={self.id}, name={self.name}, wr_time={self.wr_time})>"
