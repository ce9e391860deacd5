from schemas.base import CamelModel


class MediaUploadOut(CamelModel):
    url: str
    public_id: str
    kind: str
    bytes: int = 0
