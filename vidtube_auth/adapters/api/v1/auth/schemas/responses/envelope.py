"""Success envelope shared by every endpoint."""

from typing import Generic, Optional, TypeVar

from ..base import CamelModel

DataT = TypeVar("DataT")


class ApiResponse(CamelModel, Generic[DataT]):
    """``{"statusCode": 200, "data": ..., "message": "...", "success": true}``"""

    status_code: int
    data: Optional[DataT] = None
    message: str = "Success"
    success: bool = True

    @classmethod
    def ok(cls, data=None, message: str = "Success", status_code: int = 200) -> "ApiResponse":
        return cls(status_code=status_code, data=data, message=message, success=status_code < 400)
