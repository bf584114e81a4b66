from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from container + optionally from files
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.docker"),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="gst_invoicer", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # PDF page geometry (millimetres, A4 portrait by default)
    PDF_PAGE_WIDTH_MM: float = Field(default=210.0, gt=0, validation_alias=AliasChoices("PDF_PAGE_WIDTH_MM", "pdf_page_width_mm"))
    PDF_PAGE_HEIGHT_MM: float = Field(default=297.0, gt=0, validation_alias=AliasChoices("PDF_PAGE_HEIGHT_MM", "pdf_page_height_mm"))
    PDF_MARGIN_MM: float = Field(default=15.0, ge=0, validation_alias=AliasChoices("PDF_MARGIN_MM", "pdf_margin_mm"))
    PDF_HEADER_HEIGHT_MM: float = Field(default=70.0, gt=0, validation_alias=AliasChoices("PDF_HEADER_HEIGHT_MM", "pdf_header_height_mm"))
    PDF_FOOTER_HEIGHT_MM: float = Field(default=75.0, gt=0, validation_alias=AliasChoices("PDF_FOOTER_HEIGHT_MM", "pdf_footer_height_mm"))
    PDF_ROW_HEIGHT_MM: float = Field(default=8.0, gt=0, validation_alias=AliasChoices("PDF_ROW_HEIGHT_MM", "pdf_row_height_mm"))

    # Documents
    DEFAULT_QUOTATION_TAX_RATE: float = Field(default=18.0, ge=0, le=100, validation_alias=AliasChoices("DEFAULT_QUOTATION_TAX_RATE", "default_quotation_tax_rate"))
    INVOICE_NUMBER_PREFIX: str = Field(default="INV", validation_alias=AliasChoices("INVOICE_NUMBER_PREFIX", "invoice_number_prefix"))
    QUOTATION_NUMBER_PREFIX: str = Field(default="QUO", validation_alias=AliasChoices("QUOTATION_NUMBER_PREFIX", "quotation_number_prefix"))


settings = Settings()
