"""
Validation du formulaire d'inscription.

Regles appliquees avant toute ecriture dans le stockage local :
- identifiant et nom prefere : au moins 3 caracteres
- mot de passe : 8 caracteres minimum, un chiffre, une minuscule, une
  majuscule, un caractere special parmi @#$%^&+= et aucun espace
- confirmation identique au mot de passe

Chaque regle de mot de passe est rapportee individuellement pour que
l'interface puisse afficher la liste des exigences non remplies.
"""

import re
from dataclasses import dataclass, field

MIN_USER_ID_LENGTH = 3
MIN_PREFERRED_NAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8

PASSWORD_RULES: tuple[tuple[str, re.Pattern[str], bool], ...] = (
    # (libelle, motif, doit correspondre)
    (f"At least {MIN_PASSWORD_LENGTH} characters long", re.compile(rf"^.{{{MIN_PASSWORD_LENGTH},}}$", re.DOTALL), True),
    ("At least one digit", re.compile(r"[0-9]"), True),
    ("At least one lowercase letter", re.compile(r"[a-z]"), True),
    ("At least one uppercase letter", re.compile(r"[A-Z]"), True),
    ("At least one special character (@#$%^&+=)", re.compile(r"[@#$%^&+=]"), True),
    ("No spaces allowed", re.compile(r" "), False),
)


@dataclass
class RegistrationCheck:
    """
    Resultat de validation du formulaire d'inscription.

    Attributes:
        field_errors: Message d'erreur par champ (user_id, preferred_name,
                      confirm_password)
        password_requirements: Etat de chaque exigence du mot de passe
    """

    field_errors: dict[str, str] = field(default_factory=dict)
    password_requirements: dict[str, bool] = field(default_factory=dict)

    @property
    def unmet_password_requirements(self) -> list[str]:
        """Exigences du mot de passe non remplies, dans l'ordre d'affichage."""
        return [label for label, met in self.password_requirements.items() if not met]

    @property
    def is_valid(self) -> bool:
        return not self.field_errors and not self.unmet_password_requirements


def check_password(password: str) -> dict[str, bool]:
    """Evalue chaque exigence du mot de passe."""
    return {
        label: bool(pattern.search(password)) == must_match
        for label, pattern, must_match in PASSWORD_RULES
    }


def validate_registration(
    user_id: str,
    password: str,
    confirm_password: str,
    preferred_name: str,
) -> RegistrationCheck:
    """
    Valide les champs du formulaire d'inscription.

    Args:
        user_id: Identifiant souhaite
        password: Mot de passe
        confirm_password: Confirmation du mot de passe
        preferred_name: Nom d'affichage

    Returns:
        RegistrationCheck (is_valid == True si tout est conforme)
    """
    check = RegistrationCheck(password_requirements=check_password(password))

    if len(user_id) < MIN_USER_ID_LENGTH:
        check.field_errors["user_id"] = (
            f"User ID must be at least {MIN_USER_ID_LENGTH} characters long"
        )
    if len(preferred_name) < MIN_PREFERRED_NAME_LENGTH:
        check.field_errors["preferred_name"] = (
            f"Preferred name must be at least {MIN_PREFERRED_NAME_LENGTH} characters long"
        )
    if password != confirm_password:
        check.field_errors["confirm_password"] = "Passwords do not match"

    return check
