import os
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
	# Accept a direct URL (supports either DATABASE_URL or database_url env vars)
	database_url: str | None = None

	# Individual parts; the defaults assemble a local SQLite file so dev can boot without .env
	DB_DRIVER: str = "sqlite"
	DB_HOST: str = ""
	DB_USER: str = ""
	DB_PASSWORD: str = ""
	DB_NAME: str = "request_logs.db"
	DB_PORT: int | None = None
	SQL_ECHO: bool = False

	# Diagnostics
	LOG_LEVEL: str = "INFO"

	# Outbound request logging
	ENABLE_OUTBOUND_LOGGING: bool = True
	REQUEST_LOG_DEFAULT_PAGE_SIZE: int = 50
	REQUEST_LOG_MAX_PAGE_SIZE: int = 500
	# Key width used for the url index on engines that cannot index the full column
	URL_INDEX_PREFIX_LENGTH: int = 255

	# Prefer explicit database_url if provided; otherwise assemble from parts
	@property
	def DATABASE_URL(self) -> str:
		# 1) Value from settings (supports .env and OS env via BaseSettings)
		if self.database_url and self.database_url.strip():
			return self.database_url.strip()
		# 2) Raw OS env (e.g., uppercase on Windows), as a fallback
		explicit_url = os.getenv("DATABASE_URL")
		if explicit_url and explicit_url.strip():
			return explicit_url.strip()
		# 3) Assemble from parts
		if self.DB_DRIVER.startswith("sqlite"):
			return f"{self.DB_DRIVER}:///{self.DB_NAME}"
		port = f":{self.DB_PORT}" if self.DB_PORT else ""
		return f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}{port}/{self.DB_NAME}"

	# Pydantic v2 settings config
	model_config = SettingsConfigDict(
		env_file=".env",
		extra="ignore",
		case_sensitive=False,  # accept lowercase keys on Windows and in .env
	)

settings = Settings()
