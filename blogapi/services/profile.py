"""
Profile service.

Reads and edits the caller's profile, stores profile pictures on the local
filesystem and changes user roles for admins.
"""

from io import BytesIO
from pathlib import Path, PurePath
from uuid import UUID

import aiofiles
from PIL import Image, UnidentifiedImageError

from blogapi.configs import settings
from blogapi.configs.settings import PROFILE_PICTURE_EXTENSIONS
from blogapi.errors import (
    ImageTooLargeError,
    InvalidImageError,
    MissingUploadError,
    RegistrationError,
    StorageError,
    UnsupportedImageTypeError,
    UserNotFoundError,
)
from blogapi.models.user import UserDB
from blogapi.monitoring import get_logger
from blogapi.repositories.user import UserRepository
from blogapi.schemas.user import ProfileUpdate
from blogapi.utils.helpers import utc_now

logger = get_logger(__name__)

ROLES = ("user", "admin")


class ProfileService:
    """Service for the current user's profile and for admin role changes."""

    def __init__(self, user_repo: UserRepository, uploads_dir: Path | None = None) -> None:
        self.user_repo = user_repo
        self.uploads_dir = uploads_dir or settings.UPLOADS_DIR
        self.max_size_bytes = settings.PROFILE_PICTURE_MAX_SIZE_MB * 1024 * 1024

    async def get_profile(self, user_id: UUID) -> UserDB:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError
        return user

    async def update_profile(self, user_id: UUID, data: ProfileUpdate) -> UserDB:
        """
        Apply the non-blank fields of ``data``.

        Raises:
            UserNotFoundError: If the user no longer exists
            RegistrationError: If the new username belongs to someone else
        """
        changes: dict[str, object] = dict(data.changes())
        username = changes.get("username")
        if isinstance(username, str) and await self.user_repo.username_exists(
            username,
            exclude_id=user_id,
        ):
            mssg = "username already taken"
            raise RegistrationError(mssg)

        if not changes:
            return await self.get_profile(user_id)

        changes["updated_at"] = utc_now()
        user = await self.user_repo.update_fields(user_id, changes)
        if user is None:
            raise UserNotFoundError
        return user

    @staticmethod
    def validate_extension(filename: str | None) -> str:
        """
        Return the lower-cased extension of an accepted picture file.

        Raises:
            MissingUploadError: If there is no file name
            UnsupportedImageTypeError: If the extension is not jpg/jpeg/png
        """
        if not filename:
            raise MissingUploadError
        extension = PurePath(filename).suffix.lower()
        if extension not in PROFILE_PICTURE_EXTENSIONS:
            raise UnsupportedImageTypeError
        return extension

    def validate_file_size(self, file_data: bytes) -> None:
        actual_size = len(file_data)
        if actual_size > self.max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=settings.PROFILE_PICTURE_MAX_SIZE_MB,
                actual_size_mb=actual_size / (1024 * 1024),
            )

    @staticmethod
    def validate_image_content(file_data: bytes) -> None:
        """
        Check that the bytes decode as an image.

        Raises:
            InvalidImageError: If Pillow cannot identify or verify the data
        """
        try:
            with Image.open(BytesIO(file_data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            mssg = f"Invalid or corrupted image file: {e!s}"
            raise InvalidImageError(mssg) from e

    async def upload_picture(self, user_id: UUID, filename: str | None, file_data: bytes) -> str:
        """
        Validate, store and link a profile picture.

        Args:
            user_id: Owner of the picture
            filename: Client-side file name, used only for its extension
            file_data: Raw upload bytes

        Returns:
            str: Relative path of the stored file

        Raises:
            UnsupportedImageTypeError: If the extension is not allowed
            ImageTooLargeError: If the file exceeds the size limit
            InvalidImageError: If the bytes are not an image
            StorageError: If the file cannot be written
        """
        extension = self.validate_extension(filename)
        if not file_data:
            raise MissingUploadError
        self.validate_file_size(file_data)
        self.validate_image_content(file_data)

        directory = self.uploads_dir / "profile_pictures"
        file_path = directory / f"{user_id}{extension}"
        try:
            directory.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(file_data)
        except OSError as e:
            logger.exception("Failed to store profile picture", user_id=str(user_id))
            raise StorageError from e

        path = file_path.as_posix()
        user = await self.user_repo.update_fields(
            user_id,
            {"profile_picture": path, "updated_at": utc_now()},
        )
        if user is None:
            raise UserNotFoundError
        logger.info("Profile picture stored", user_id=str(user_id), path=path)
        return path

    async def set_role(self, user_id: UUID, role: str) -> UserDB:
        if role not in ROLES:
            mssg = f"Unknown role: {role}"
            raise ValueError(mssg)
        user = await self.user_repo.update_fields(user_id, {"role": role, "updated_at": utc_now()})
        if user is None:
            raise UserNotFoundError
        logger.info("User role changed", user_id=str(user_id), role=role)
        return user
