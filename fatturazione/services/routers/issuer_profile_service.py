import logging

from fatturazione.core.exceptions import ValidationException, NotFoundException, ErrorCode
from fatturazione.models.issuer_profile import IssuerProfile
from fatturazione.repository.interfaces.issuer_profile_repository_interface import IIssuerProfileRepository
from fatturazione.services.interfaces.issuer_profile_service_interface import IIssuerProfileService
from fatturazione.services.validators.issuer_profile_validator import IssuerProfileValidator

logger = logging.getLogger(__name__)


class IssuerProfileService(IIssuerProfileService):
    """Configurazione del profilo emittente"""

    def __init__(self, issuer_profile_repository: IIssuerProfileRepository, validator: IssuerProfileValidator = None):
        self._repository = issuer_profile_repository
        self._validator = validator or IssuerProfileValidator()

    async def get_profile(self) -> IssuerProfile:
        profile = self._repository.get()
        if profile is None:
            raise NotFoundException("IssuerProfile")
        return profile

    async def set_profile(self, profile: IssuerProfile) -> IssuerProfile:
        result = self._validator.validate(profile)
        if not result.is_valid:
            raise ValidationException(
                "Profilo emittente non valido",
                ErrorCode.VALIDATION_ERROR,
                errors=result.error_dicts()
            )
        self._repository.save(profile)
        logger.info(f"Profilo emittente configurato: {profile.ragione_sociale}")
        return profile
