from pydantic import BaseModel


class UploadedFile(BaseModel):
    temporary_path: str
    original_name: str
    mime_hint: str = "text/csv"
