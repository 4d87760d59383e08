from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by endpoints without a resource body."""

    message: str
