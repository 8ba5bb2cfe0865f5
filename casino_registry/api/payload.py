"""
Request bodies that may arrive as JSON or as multipart forms with files.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, List, Tuple, Type, TypeVar

from fastapi import Request, UploadFile
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile as StarletteUploadFile

from casino_registry.api.deps import SettingsDep
from casino_registry.core.config import Settings
from casino_registry.core.errors import ValidationFailed, from_pydantic

SchemaT = TypeVar("SchemaT", bound=BaseModel)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class Payload(Generic[SchemaT]):
    data: SchemaT
    files: List[UploadFile] = field(default_factory=list)


def check_files(files: List[UploadFile], settings: Settings) -> List[UploadFile]:
    """Enforce the per-request file count and per-file size limits."""
    if len(files) > settings.MAX_UPLOAD_FILES:
        raise ValidationFailed(
            details=[
                {
                    "field": "files",
                    "message": f"At most {settings.MAX_UPLOAD_FILES} files can be uploaded at once",
                }
            ]
        )
    for upload in files:
        if upload.size is not None and upload.size > settings.MAX_UPLOAD_FILE_BYTES:
            raise ValidationFailed(
                details=[{"field": "files", "message": f"{upload.filename} exceeds the size limit"}]
            )
    return files


async def read_form(request: Request) -> Tuple[Dict[str, Any], List[UploadFile]]:
    """Split a form into plain fields and uploaded files. Empty fields are dropped."""
    form = await request.form()
    fields: Dict[str, Any] = {}
    files: List[UploadFile] = []
    for key, value in form.multi_items():
        if isinstance(value, StarletteUploadFile):
            if value.filename:
                files.append(value)  # type: ignore[arg-type]
        elif value != "":
            fields[key] = value
    return fields, files


async def read_json(request: Request) -> Dict[str, Any]:
    body = await request.body()
    if not body:
        return {}
    try:
        raw = await request.json()
    except ValueError:
        raise ValidationFailed("Invalid JSON body") from None
    if not isinstance(raw, dict):
        raise ValidationFailed("Request body must be a JSON object")
    return raw


def payload_parser(schema: Type[SchemaT]) -> Callable[..., Awaitable[Payload[SchemaT]]]:
    """
    Build a dependency that validates ``schema`` from a JSON body or from
    multipart form fields, collecting any uploaded files alongside.
    """

    async def parse(request: Request, settings: SettingsDep) -> Payload[SchemaT]:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_CONTENT_TYPES):
            raw, files = await read_form(request)
        else:
            raw, files = await read_json(request), []

        check_files(files, settings)
        try:
            data = schema.model_validate(raw)
        except ValidationError as e:
            raise from_pydantic(e) from e
        return Payload(data=data, files=files)

    return parse


async def uploaded_files(request: Request, settings: SettingsDep) -> List[UploadFile]:
    """Dependency for attachment-only uploads."""
    _, files = await read_form(request)
    if not files:
        raise ValidationFailed("No files provided")
    return check_files(files, settings)
