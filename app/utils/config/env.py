from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "role-gate"
    environment: str = "local"
    debug: bool = True
    log_level: str = "INFO"
    port: int = 3000

    mongodb_uri: str | None = None
    mongo_scheme: str = "mongodb+srv"
    mongo_port: int = 27017
    mongo_host: str = "localhost"
    mongo_db: str = "role_gate"
    mongo_password: str | None = None
    mongo_params: str | None = "retryWrites=true&w=majority"
    mongo_user: str | None = None
    mongo_tls: bool = True
    mongo_timeout_ms: int = 5000

    jwt_algorithm: str = "HS256"
    jwt_secret_key: str = "very-secret-key"
    access_token_expires_minutes: int = 60
    password_hash_rounds: int = 10

    admin_email: str = "admin@example.com"
    admin_password: str = "Admin123@"
    admin_name: str = "Admin"
    admin_last_name: str = "Principal"
    admin_phone_number: str = "+51987654321"
    admin_birthdate: str = "1990-01-01"
    admin_url_profile: str = ""
    admin_address: str = ""

    cors_origins: list[str] = ["*"]
    public_dir: str = "public"

    model_config = SettingsConfigDict(env_file=(".env",), case_sensitive=False, frozen=True)

    @property
    def mongo_uri(self) -> str:
        if self.mongodb_uri:
            return self.mongodb_uri
        auth = ""
        if self.mongo_user and self.mongo_password:
            auth = f"{self.mongo_user}:{self.mongo_password}@"
        host = self.mongo_host
        if self.mongo_scheme == "mongodb":
            host = f"{host}:{self.mongo_port}"
        params = f"?{self.mongo_params}" if self.mongo_params else ""
        return f"{self.mongo_scheme}://{auth}{host}/{self.mongo_db}{params}"


settings = Settings()
