from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for member management (auth admin API)

    # Storage
    case_images_bucket: str = "case-images"
    image_width: int = 1024
    image_height: int = 768
    image_quality: int = 65

    # EmailJS relay for offer form notifications
    emailjs_api_url: str = "https://api.emailjs.com/api/v1.0/email/send"
    emailjs_service_id: Optional[str] = None
    emailjs_template_id: Optional[str] = None
    emailjs_public_key: Optional[str] = None
    emailjs_timeout: float = 10.0

    # Admin lists
    default_page_size: int = 6
    max_page_size: int = 100
    latest_reviews_limit: int = 10

    # 3D viewer
    viewer_model_url: str = "/models/laptop.glb"
    viewer_max_scroll: float = 600.0
    viewer_target_size: float = 3.0

    # App
    app_name: str = "agency-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    offer_form_rate_limit: str = "5/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def emailjs_configured(self) -> bool:
        return bool(self.emailjs_service_id and self.emailjs_template_id and self.emailjs_public_key)

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
