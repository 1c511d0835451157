from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias="APP_ENV")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # CORS (comma-separated). Unset means any origin.
    cors_origins: str | None = Field(default=None, validation_alias="CORS_ORIGINS")

    # AWS / data
    aws_region: str = Field(default="us-east-1", validation_alias="AWS_REGION")
    ddb_table_name: str | None = Field(default="BlogPosts", validation_alias="DDB_TABLE_NAME")
    # Local development points this at DynamoDB Local (e.g. http://localhost:8000).
    ddb_endpoint_url: str | None = Field(default=None, validation_alias="DDB_ENDPOINT_URL")

    # GraphQL
    graphql_path: str = Field(default="/graphql", validation_alias="GRAPHQL_PATH")
    graphql_ide_enabled: bool | None = Field(default=None, validation_alias="GRAPHQL_IDE_ENABLED")

    # Lambda / API Gateway
    api_gateway_base_path: str = Field(default="/", validation_alias="API_GATEWAY_BASE_PATH")

    # ---- helpers / derived flags ----
    @property
    def normalized_environment(self) -> str:
        v = (self.environment or "").strip().lower()
        if v in ("prod", "production"):
            return "production"
        if v in ("stage", "staging"):
            return "staging"
        if v in ("dev", "development"):
            return "development"
        return v or "development"

    @property
    def is_production(self) -> bool:
        return self.normalized_environment == "production"

    @property
    def graphql_ide(self) -> bool:
        if self.graphql_ide_enabled is None:
            return not self.is_production
        return bool(self.graphql_ide_enabled)

    @property
    def allowed_origins(self) -> list[str]:
        if not self.cors_origins:
            return ["*"]
        return sorted({s.strip() for s in str(self.cors_origins).split(",") if s.strip()}) or ["*"]

    def require_in_production(self) -> None:
        """
        Enforce required settings in production.

        Local work may run against DynamoDB Local; production must talk to the
        real regional endpoint with a configured table.
        """
        if not self.is_production:
            return

        problems: list[str] = []
        if not (self.ddb_table_name and str(self.ddb_table_name).strip()):
            problems.append("DDB_TABLE_NAME is required")
        if self.ddb_endpoint_url and str(self.ddb_endpoint_url).strip():
            problems.append("DDB_ENDPOINT_URL must not be set")

        if problems:
            raise RuntimeError("Invalid production configuration: " + ", ".join(problems))

    def to_log_safe_dict(self) -> dict[str, object]:
        """
        A representation safe for structured logs / diagnostics.
        """
        return {
            "environment": self.normalized_environment,
            "log_level": self.log_level,
            "cors_origins": self.allowed_origins,
            "aws": {
                "aws_region": self.aws_region,
                "ddb_table_name": self.ddb_table_name,
                "ddb_endpoint_url": self.ddb_endpoint_url,
            },
            "graphql": {
                "path": self.graphql_path,
                "ide": self.graphql_ide,
            },
            "api_gateway_base_path": self.api_gateway_base_path,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    s = Settings()
    s.require_in_production()
    return s

