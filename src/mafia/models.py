from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class SessionCredentials(BaseModel):
    """Temporary credentials returned by an MFA authenticated STS call."""

    model_config = ConfigDict(frozen=True)

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: Optional[datetime] = None
