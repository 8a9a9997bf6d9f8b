from fastapi import APIRouter, HTTPException, status, Depends
from fastapi.security import OAuth2PasswordBearer
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from openinv.deps import get_user_store
from openinv.models.user import UserCreate, UserLogin, UserInDB, UserOut, Token
from openinv.core.config import settings
from openinv.stores.base import new_id
from openinv.stores.users import UserStore

router = APIRouter(prefix="/api/auth", tags=["auth"])

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def create_access_token(data: dict, expires_delta: timedelta):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

async def get_current_user(
    token: str = Depends(oauth2_scheme),
    users: UserStore = Depends(get_user_store),
) -> UserInDB:
    credentials_error = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise credentials_error
    email = payload.get("sub")
    if not email:
        raise credentials_error
    user = await users.find_by_email(email)
    if user is None:
        raise credentials_error
    return user

@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def signup(user: UserCreate, users: UserStore = Depends(get_user_store)):
    existing = await users.find_by_email(user.email)
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    record = UserInDB(
        id=new_id(),
        username=user.username,
        email=user.email,
        password=hash_password(user.password),
    )
    await users.add(record)
    return UserOut(**record.model_dump())

@router.post("/login", response_model=Token)
async def login(user: UserLogin, users: UserStore = Depends(get_user_store)):
    db_user = await users.find_by_email(user.email)
    if not db_user or not verify_password(user.password, db_user.password):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token_data = {"sub": db_user.email}
    access_token = create_access_token(
        data=token_data,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes)
    )
    return Token(access_token=access_token)

@router.get("/me", response_model=UserOut)
async def me(current_user: UserInDB = Depends(get_current_user)):
    return UserOut(**current_user.model_dump())
