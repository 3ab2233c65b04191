from fastapi import APIRouter, Depends, status

from fatturazione.models.issuer_profile import IssuerProfile
from fatturazione.services.interfaces.issuer_profile_service_interface import IIssuerProfileService
from .dependencies import get_issuer_profile_service

router = APIRouter(
    prefix="/api/v1/issuer-profile",
    tags=["IssuerProfile"],
)


@router.get("", status_code=status.HTTP_200_OK, response_model=IssuerProfile)
async def get_issuer_profile(
    issuer_service: IIssuerProfileService = Depends(get_issuer_profile_service)
):
    """Profilo emittente configurato."""
    return await issuer_service.get_profile()


@router.put("", status_code=status.HTTP_200_OK, response_model=IssuerProfile)
async def set_issuer_profile(
    profile: IssuerProfile,
    issuer_service: IIssuerProfileService = Depends(get_issuer_profile_service)
):
    """Configura il profilo emittente (cedente/prestatore) usato per l'XML."""
    return await issuer_service.set_profile(profile)
