"""
Endpoints de consulta de mapas.
"""
from fastapi import APIRouter, Depends, Query

from bhop_records.application.dto.map_dto import MapDetailsDTO, MapSearchResultDTO
from bhop_records.application.use_cases.map_lookup_use_cases import MapLookupUseCases
from bhop_records.api.v1.dependencies.use_case_deps import get_map_lookup_use_cases

router = APIRouter(prefix="/maps", tags=["Maps"])


@router.get("", response_model=MapSearchResultDTO)
async def search_maps(
    q: str = Query(..., min_length=1, description="Texto a buscar en el nombre del mapa"),
    use_cases: MapLookupUseCases = Depends(get_map_lookup_use_cases),
):
    """
    Buscar mapas por nombre (subcadena, sin distinguir mayusculas).
    """
    results = await use_cases.search_maps(q)
    return MapSearchResultDTO(query=q, results=results)


@router.get("/{map_name}", response_model=MapDetailsDTO)
async def get_map(
    map_name: str,
    use_cases: MapLookupUseCases = Depends(get_map_lookup_use_cases),
):
    """
    Obtener el detalle de un mapa. Si no tiene WR guardado se intenta
    cargarlo desde SourceJump.
    """
    return await use_cases.get_map_details(map_name)
