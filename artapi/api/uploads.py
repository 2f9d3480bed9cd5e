from starlette.datastructures import UploadFile
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from artapi.api.exceptions import ImageValidationError

IMAGE_FIELD = "image"


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


async def read_image_upload(
    request: Request,
    *,
    max_image_bytes: int,
    max_form_bytes: int,
) -> bytes:
    """Read the multipart `image` field of a submission request.

    Raises:
        ImageValidationError: body over the form cap, malformed form, missing or
            empty image, or image over the image cap.
    """
    declared = _declared_length(request)
    if declared is not None and declared > max_form_bytes:
        raise ImageValidationError("Invalid form data")

    try:
        async with request.form() as form:
            upload = form.get(IMAGE_FIELD)
            if not isinstance(upload, UploadFile):
                raise ImageValidationError("Missing or invalid image field")
            # one byte past the cap is enough to reject
            data = await upload.read(max_image_bytes + 1)
    except MultiPartException as exc:
        raise ImageValidationError("Invalid form data") from exc

    if not data:
        raise ImageValidationError("Missing or invalid image field")
    if len(data) > max_image_bytes:
        raise ImageValidationError(f"Image too large (max {max_image_bytes >> 20}MB)")
    return data
