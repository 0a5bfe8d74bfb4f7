"""
Couche application de MovieViewer.

- SyncRepository : synchronisation API distante / stockage local
- validate_registration : validation du formulaire d'inscription
"""

from movieviewer.services.registration import RegistrationCheck, validate_registration
from movieviewer.services.sync_repository import SyncRepository

__all__ = [
    "SyncRepository",
    "RegistrationCheck",
    "validate_registration",
]
