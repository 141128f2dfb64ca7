"""Presentation of stored payloads as inline ``data:`` URIs.

The bytes are never decoded or re-encoded; Pillow only reads the header to
pick a media type.
"""
import base64
import io

from PIL import Image as PILImage

DEFAULT_MEDIA_TYPE = "image/jpeg"


def sniff_media_type(data):
    """Media type from the image header, or ``image/jpeg`` if unrecognised."""
    try:
        with PILImage.open(io.BytesIO(data)) as img:
            image_format = img.format
    except (OSError, ValueError, PILImage.DecompressionBombError):
        return DEFAULT_MEDIA_TYPE
    return PILImage.MIME.get(image_format, DEFAULT_MEDIA_TYPE)


def data_uri(data):
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{sniff_media_type(data)};base64,{encoded}"


def serialize_image(record):
    return {
        "id": record.id,
        "imageName": record.name,
        "imageUrl": data_uri(record.data),
    }
