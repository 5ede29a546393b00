import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status

from fittrack.auth.jwt_auth import create_access_token, get_current_user, hash_password, verify_password
from fittrack.database.connection import db
from fittrack.database.helpers import oid
from fittrack.models.user import AuthResponse, UserLogin, UserRegister, UserResponse, UserUpdate, public_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/auth/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserRegister):
    """Create an account and return it with a fresh token"""
    email = payload.email.lower()
    if db.users.find_one({"email": email}):
        raise HTTPException(status_code=400, detail="User with this email already exists")
    if db.users.find_one({"username": payload.username}):
        raise HTTPException(status_code=400, detail="Username already taken")

    now = datetime.utcnow()
    doc = payload.model_dump(exclude={"password"})
    doc.update({
        "email": email,
        "password": hash_password(payload.password),
        "role": "user",
        "created_at": now,
        "updated_at": now,
    })
    result = db.users.insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info(f"Registered user {payload.username}")

    return {"user": public_user(doc), "token": create_access_token(str(result.inserted_id))}


@router.post("/auth/login", response_model=AuthResponse)
def login_user(payload: UserLogin):
    user = db.users.find_one({"email": payload.email.lower()})
    if not user or not verify_password(payload.password, user.get("password", "")):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    now = datetime.utcnow()
    db.users.update_one({"_id": user["_id"]}, {"$set": {"last_login_at": now}})
    user["last_login_at"] = now

    return {"user": public_user(user), "token": create_access_token(str(user["_id"]))}


@router.get("/auth/me", response_model=UserResponse)
def read_me(current_user: dict = Depends(get_current_user)):
    return public_user(current_user)


@router.put("/users/{user_id}", response_model=UserResponse)
def update_user(user_id: str, payload: UserUpdate, current_user: dict = Depends(get_current_user)):
    if str(current_user["_id"]) != user_id:
        raise HTTPException(status_code=403, detail="You can only update your own profile")

    updates = payload.model_dump(exclude_unset=True)
    if "username" in updates:
        taken = db.users.find_one({"username": updates["username"], "_id": {"$ne": oid(user_id)}})
        if taken:
            raise HTTPException(status_code=400, detail="Username already taken")
    updates["updated_at"] = datetime.utcnow()

    updated = db.users.find_one_and_update(
        {"_id": oid(user_id)},
        {"$set": updates},
        return_document=True,
    )
    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return public_user(updated)
