from pydantic import BaseModel


class TestKeyRequest(BaseModel):
    apiKey: str = ""


class ProcessTextRequest(BaseModel):
    text: str = ""
    apiKey: str = ""
    filename: str = ""
