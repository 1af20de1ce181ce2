from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from bloglist.database.connection import get_db
from bloglist.models.schemas import LoginRequest, LoginResponse
from bloglist.utils.security import create_access_token, verify_password

router = APIRouter()


@router.post("", response_model=LoginResponse)
def login(payload: LoginRequest, db=Depends(get_db)):
    user = db.users.find_one({"username": payload.username})
    if not user or not verify_password(payload.password, user.get("passwordHash", "")):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "invalid username or password"},
        )
    token = create_access_token({"sub": user["username"], "id": str(user["_id"])})
    return {"token": token, "username": user["username"], "name": user.get("name")}
