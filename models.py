"""API models for KerPIC."""
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialises field names as camelCase, accepts either form on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageRef(CamelModel):
    """Image entry of a folder listing, metadata not yet resolved."""
    name: str
    path: str


class ImageInfo(CamelModel):
    """Resolved metadata of an image file."""
    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    size: int = 0
    mod_time: datetime
    width: int = 0
    height: int = 0
    orientation: int = 0
    thumbnail_url: str


class FolderInfo(CamelModel):
    """Folder with its direct images and subfolders."""
    name: str
    path: str
    images: List[ImageRef] = Field(default_factory=list)
    subfolders: List["FolderInfo"] = Field(default_factory=list)


class BatchRequest(CamelModel):
    image_paths: List[str]


class BatchResponse(CamelModel):
    id: str
    images: List[ImageInfo]


class SaveRequest(CamelModel):
    batch_id: str
    selected_paths: List[str]
    target_folder: str = ""


class SaveResult(CamelModel):
    success: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
    conflicts: List[str] = Field(default_factory=list)
    target_folder: str
