import logging
from typing import Optional

from bson import ObjectId
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from bloglist.database.connection import get_db
from bloglist.utils.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False: handlers answer a missing token themselves
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db=Depends(get_db)):
    """Resolve the bearer token to a user projection, or None."""
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except JWTError as e:
        logger.info("rejected token: %s", e)
        return None

    user_id = payload.get("id")
    if not user_id or not ObjectId.is_valid(user_id):
        return None
    return db.users.find_one({"_id": ObjectId(user_id)}, {"username": 1, "name": 1})
