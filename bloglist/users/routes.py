from typing import List

from fastapi import APIRouter, Depends, HTTPException

from bloglist.database.connection import get_db
from bloglist.models.documents import doc_to_dict, user_to_dict
from bloglist.models.schemas import UserCreate, UserOut
from bloglist.utils.security import hash_password

router = APIRouter()


@router.get("", response_model=List[UserOut])
def list_users(db=Depends(get_db)):
    users = list(db.users.find())
    blog_ids = [b for u in users for b in u.get("blogs", [])]
    blogs = {
        b["_id"]: doc_to_dict(b)
        for b in db.blogs.find({"_id": {"$in": blog_ids}}, {"user": 0})
    }
    return [
        user_to_dict(u, blogs=[blogs[b] for b in u.get("blogs", []) if b in blogs])
        for u in users
    ]


@router.post("", status_code=201, response_model=UserOut)
def create_user(payload: UserCreate, db=Depends(get_db)):
    if db.users.find_one({"username": payload.username}):
        raise HTTPException(status_code=400, detail="expected `username` to be unique")

    doc = {
        "username": payload.username,
        "name": payload.name,
        "passwordHash": hash_password(payload.password),
        "blogs": [],
    }
    doc["_id"] = db.users.insert_one(doc).inserted_id
    return user_to_dict(doc, blogs=[])
