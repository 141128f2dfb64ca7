from photovault.models.image import ArchivedImage, Image, ImageRecord

__all__ = ["ArchivedImage", "Image", "ImageRecord"]
