from matrix_sdk.models.base import MatrixModel


class RoomIdResponse(MatrixModel):
    """Body of ``/createRoom`` and ``/join`` responses."""

    room_id: str


class UploadResponse(MatrixModel):
    content_uri: str | None = None
