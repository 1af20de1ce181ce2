from pydantic import BaseModel, Field
from typing import List, Optional, Union


class BlogCreate(BaseModel):
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)
    author: Optional[str] = None
    likes: int = Field(default=0, ge=0)


class UserSummary(BaseModel):
    id: str
    username: str
    name: Optional[str] = None


class BlogOut(BaseModel):
    id: str
    title: str
    author: Optional[str] = None
    url: str
    likes: int = 0
    # owner id as stored, or the expanded owner on list
    user: Optional[Union[UserSummary, str]] = None


class BlogSummary(BaseModel):
    id: str
    title: str
    author: Optional[str] = None
    url: str
    likes: int = 0


class UserCreate(BaseModel):
    username: str = Field(min_length=3)
    name: Optional[str] = None
    password: str = Field(min_length=3)


class UserOut(BaseModel):
    id: str
    username: str
    name: Optional[str] = None
    blogs: List[BlogSummary] = []


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    username: str
    name: Optional[str] = None
