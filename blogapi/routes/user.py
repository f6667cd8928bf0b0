# blogapi/routes/user.py

"""
User Routes.

Endpoints for the authenticated user's session and profile, plus
admin-only role management.

Summary
-------
Endpoints include:
  - Logout (revokes stored refresh tokens)
  - Get and update own profile
  - Upload profile picture
  - Promote / demote users (admin)
"""

from typing import Annotated

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from blogapi.decorators import timed
from blogapi.dependencies import AdminDep, AuthServiceDep, ProfileServiceDep, UserDBDep
from blogapi.errors import MissingUploadError
from blogapi.managers import limiter, tiered_limit
from blogapi.monitoring import get_logger
from blogapi.schemas import MessageResponse, PictureUploadResponse, ProfileResponse, ProfileUpdate
from blogapi.utils.identifiers import parse_uuid

router = APIRouter(prefix="/user", tags=["👤 Users"])

logger = get_logger(__name__)

INVALID_USER_ID = "Invalid user ID"

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"error": "Rate limit exceeded"}}},
}
UNAUTHORIZED_RESPONSE = {
    "description": "Unauthorized",
    "content": {"application/json": {"example": {"error": "User not authenticated"}}},
}
ADMIN_RESPONSES = {
    401: UNAUTHORIZED_RESPONSE,
    403: {
        "description": "Forbidden",
        "content": {"application/json": {"example": {"error": "Admin access required"}}},
    },
    404: {
        "description": "Not found",
        "content": {"application/json": {"example": {"error": "User not found"}}},
    },
    429: RATE_LIMIT_RESPONSE,
}


@router.post(
    "/logout",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Logout",
    description="Revoke every refresh token of the caller.",
    responses={401: UNAUTHORIZED_RESPONSE, 429: RATE_LIMIT_RESPONSE},
    operation_id="user_logout",
)
@timed("/user/logout")
@limiter.limit("10/minute")
async def logout(
    request: Request,
    response: Response,
    user: UserDBDep,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    await auth_service.logout(user.id)
    return MessageResponse(message="Logout successful")


@router.get(
    "/profile/me",
    response_class=ORJSONResponse,
    response_model=ProfileResponse,
    response_model_by_alias=True,
    summary="Get own profile",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "userId": "123e4567-e89b-12d3-a456-426614174000",
                        "role": "user",
                        "username": "johndoe",
                        "email": "johndoe@gmail.com",
                        "bio": "Writes about Python",
                        "profilePicture": "uploads/profile_pictures/123e4567.png",
                    },
                },
            },
        },
        401: UNAUTHORIZED_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="user_profile_me",
)
@timed("/user/profile/me")
@limiter.limit(tiered_limit(50))
async def get_profile(
    request: Request,
    response: Response,
    user: UserDBDep,
    service: ProfileServiceDep,
) -> ProfileResponse:
    """
    Get the current user's profile.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    user : UserDB
        Authenticated user.
    service : ProfileService
        Profile service dependency.

    Returns
    -------
    ProfileResponse
        Profile with camelCase keys.
    """
    profile = await service.get_profile(user.id)
    return ProfileResponse(
        user_id=profile.id,
        role=profile.role,
        username=profile.username,
        email=profile.email,
        bio=profile.bio,
        profile_picture=profile.profile_picture,
    )


@router.put(
    "/profile",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Update own profile",
    description="Apply the non-empty fields among username, bio and profilePicture.",
    responses={
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"error": "username already taken"}}},
        },
        401: UNAUTHORIZED_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="user_profile_update",
)
@timed("/user/profile/update")
@limiter.limit(tiered_limit(10))
async def update_profile(
    request: Request,
    response: Response,
    body: ProfileUpdate,
    user: UserDBDep,
    service: ProfileServiceDep,
) -> MessageResponse:
    await service.update_profile(user.id, body)
    return MessageResponse(message="profile updated")


@router.post(
    "/profile/picture",
    response_class=ORJSONResponse,
    response_model=PictureUploadResponse,
    summary="Upload profile picture",
    description="Upload a jpg, jpeg or png image in the multipart field `profilePicture`.",
    responses={
        400: {
            "description": "Bad Request",
            "content": {
                "application/json": {
                    "example": {"error": "invalid file type, only jpg/jpeg/png allowed"},
                },
            },
        },
        401: UNAUTHORIZED_RESPONSE,
        413: {
            "description": "Payload too large",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Your image is too large. Please use an image smaller than 5MB.",
                    },
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="user_profile_picture",
)
@timed("/user/profile/picture")
@limiter.limit("5/minute")
async def upload_profile_picture(
    request: Request,
    response: Response,
    user: UserDBDep,
    service: ProfileServiceDep,
    picture: Annotated[UploadFile | None, File(alias="profilePicture")] = None,
) -> PictureUploadResponse:
    """
    Store a new profile picture for the current user.

    Raises
    ------
    MissingUploadError
        If no file was sent.
    UnsupportedImageTypeError
        If the extension is not jpg, jpeg or png.
    ImageTooLargeError
        If the file exceeds the size limit.
    InvalidImageError
        If the bytes are not an image.
    """
    if picture is None:
        raise MissingUploadError
    data = await picture.read()
    path = await service.upload_picture(user.id, picture.filename, data)
    return PictureUploadResponse(path=path)


@router.put(
    "/admin/promote/{user_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Promote user to admin",
    responses=ADMIN_RESPONSES,
    operation_id="admin_promote_user",
)
@timed("/user/admin/promote")
@limiter.limit("10/minute")
async def promote_user(
    request: Request,
    response: Response,
    user_id: str,
    admin: AdminDep,
    service: ProfileServiceDep,
) -> MessageResponse:
    await service.set_role(parse_uuid(user_id, INVALID_USER_ID), "admin")
    logger.info("User promoted", target=user_id, by=str(admin.id))
    return MessageResponse(message="User promoted to admin")


@router.put(
    "/admin/demote/{user_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Demote admin to regular user",
    responses=ADMIN_RESPONSES,
    operation_id="admin_demote_user",
)
@timed("/user/admin/demote")
@limiter.limit("10/minute")
async def demote_user(
    request: Request,
    response: Response,
    user_id: str,
    admin: AdminDep,
    service: ProfileServiceDep,
) -> MessageResponse:
    await service.set_role(parse_uuid(user_id, INVALID_USER_ID), "user")
    logger.info("User demoted", target=user_id, by=str(admin.id))
    return MessageResponse(message="User demoted to regular user")
