"""SQLAlchemy mapper events.

Email normalization is also applied by the ``@validates`` hook on UserModel;
these listeners re-apply it right before the row is written so that no write
path can store a non-normalized address.
"""

from sqlalchemy import event

from accounthub.core.logging import get_logger
from accounthub.domain.services.email_normalizer import normalize_email
from accounthub.infrastructure.persistence.models.user import UserModel

logger = get_logger(__name__)


def _normalize_user_email(mapper, connection, target: UserModel) -> None:
    normalized = normalize_email(target.email)
    if normalized != target.email:
        target.email = normalized
        logger.debug("User email normalized before write", user_id=target.id)


event.listen(UserModel, "before_insert", _normalize_user_email)
event.listen(UserModel, "before_update", _normalize_user_email)
