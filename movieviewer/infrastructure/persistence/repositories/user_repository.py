"""
Implementation SQLModel du repository User.

Implemente l'interface IUserRepository pour la persistance des comptes
dans la base de donnees SQLite via SQLModel.
"""

from typing import Optional

from sqlalchemy import Engine
from sqlmodel import Session

from movieviewer.core.entities.user import User
from movieviewer.core.ports.repositories import IUserRepository
from movieviewer.infrastructure.persistence.models import UserModel


class SQLModelUserRepository(IUserRepository):
    """
    Repository SQLModel pour les comptes utilisateurs.

    Chaque operation ouvre sa propre session : le repository peut etre
    appele depuis n'importe quel thread du pool de stockage.
    """

    def __init__(self, engine: Engine) -> None:
        """
        Initialise le repository avec l'engine partage.

        Args :
            engine : Engine SQLAlchemy initialise
        """
        self._engine = engine

    def _to_entity(self, model: UserModel) -> User:
        return User(
            user_id=model.user_id,
            password=model.password,
            preferred_name=model.preferred_name,
        )

    def get(self, user_id: str) -> Optional[User]:
        """Recupere un utilisateur par son identifiant."""
        with Session(self._engine) as session:
            model = session.get(UserModel, user_id)
            if model:
                return self._to_entity(model)
            return None

    def save(self, user: User) -> User:
        """Sauvegarde un utilisateur (insertion ou remplacement)."""
        with Session(self._engine) as session:
            model = session.get(UserModel, user.user_id)
            if model:
                model.password = user.password
                model.preferred_name = user.preferred_name
            else:
                model = UserModel(
                    user_id=user.user_id,
                    password=user.password,
                    preferred_name=user.preferred_name,
                )
            session.add(model)
            session.commit()
            session.refresh(model)
            return self._to_entity(model)

    def exists(self, user_id: str) -> bool:
        """Verifie si un identifiant est deja enregistre."""
        with Session(self._engine) as session:
            return session.get(UserModel, user_id) is not None
