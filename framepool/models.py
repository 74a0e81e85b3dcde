"""Data models for Immich assets."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are assumed to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AssetType(str, Enum):
    """Media type reported by Immich."""

    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    OTHER = "OTHER"


class ExifInfo(BaseModel):
    """Subset of EXIF metadata used for filtering and weighting."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    date_time_original: datetime | None = Field(
        default=None, alias="dateTimeOriginal", description="Capture timestamp"
    )
    rating: int | None = Field(default=None, description="Star rating")
    city: str | None = Field(default=None, description="City where the photo was taken")
    country: str | None = Field(default=None, description="Country where the photo was taken")
    make: str | None = Field(default=None, description="Camera make")
    model: str | None = Field(default=None, description="Camera model")

    @field_validator("date_time_original", mode="before")
    @classmethod
    def _parse_date(cls, value):
        # Unparseable EXIF dates are dropped so the asset falls back to fileCreatedAt
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return None
        if isinstance(value, datetime):
            return as_utc(value)
        return None

    @field_validator("rating", mode="before")
    @classmethod
    def _parse_rating(cls, value):
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None


class Asset(BaseModel):
    """One media item from the Immich catalog."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., description="Immich asset ID")
    type: AssetType = Field(default=AssetType.OTHER, description="Media type")
    is_archived: bool = Field(default=False, alias="isArchived", description="Archived flag")
    is_favorite: bool = Field(default=False, alias="isFavorite", description="Favorite flag")
    file_created_at: datetime = Field(
        ..., alias="fileCreatedAt", description="File creation timestamp"
    )
    original_file_name: str | None = Field(
        default=None, alias="originalFileName", description="Original file name"
    )
    exif_info: ExifInfo | None = Field(default=None, alias="exifInfo", description="EXIF data")

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value):
        if isinstance(value, AssetType):
            return value
        try:
            return AssetType(str(value).upper())
        except ValueError:
            return AssetType.OTHER

    @field_validator("file_created_at")
    @classmethod
    def _normalize_created(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def effective_date(self) -> datetime:
        """Capture date when EXIF has one, otherwise the file creation date."""
        if self.exif_info is not None and self.exif_info.date_time_original is not None:
            return self.exif_info.date_time_original
        return self.file_created_at

    @property
    def rating(self) -> int | None:
        return self.exif_info.rating if self.exif_info is not None else None


class AlbumResponse(BaseModel):
    """Album with its assets."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., description="Album ID")
    album_name: str = Field(default="", alias="albumName", description="Album name")
    assets: list[Asset] = Field(default_factory=list, description="Assets in the album")


class SearchAssetsPage(BaseModel):
    """The `assets` section of a metadata search response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    items: list[Asset] = Field(default_factory=list, description="Matching assets")
    total: int = Field(default=0, description="Number of items in this page")


class SearchAssetsResponse(BaseModel):
    """Response body of `POST /api/search/metadata`."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    assets: SearchAssetsPage = Field(default_factory=SearchAssetsPage)
