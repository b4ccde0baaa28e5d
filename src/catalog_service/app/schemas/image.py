from pydantic import BaseModel, ConfigDict, Field


class ImageUploadResponse(BaseModel):
    """Response model for a stored item image"""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., description="Success message")
    attachment_id: int = Field(
        ..., alias="attachmentId", description="Identifier of the attachment record"
    )
    file_name: str = Field(
        ..., alias="fileName", description="Generated storage name of the original"
    )
    original_path: str = Field(
        ..., alias="originalPath", description="Path serving the original bytes"
    )
    derivative_path_template: str = Field(
        ...,
        alias="derivativePathTemplate",
        description="Path template with {dimensions} and {quality} placeholders",
    )

