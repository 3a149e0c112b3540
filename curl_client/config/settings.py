from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CurlSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    timeout_seconds: float = Field(10.0, validation_alias="CURL_TIMEOUT_SECONDS")
    # 0 leaves the libcurl default connect timeout in place.
    connect_timeout_seconds: float = Field(0.0, validation_alias="CURL_CONNECT_TIMEOUT_SECONDS")
    max_redirects: int = Field(10, validation_alias="CURL_MAX_REDIRECTS")
    follow_location: bool = Field(True, validation_alias="CURL_FOLLOW_LOCATION")
    auto_referer: bool = Field(True, validation_alias="CURL_AUTO_REFERER")

    # Off by default: certificate and hostname checks are skipped unless enabled.
    verify_ssl: bool = Field(False, validation_alias="CURL_VERIFY_SSL")

    user_agent: str = Field("", validation_alias="CURL_USER_AGENT")
    default_encoding: str = Field("utf-8", validation_alias="CURL_DEFAULT_ENCODING")
