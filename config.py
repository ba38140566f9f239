"""
Configuration management for the Candidate Fit & Context Engine
"""

import os
from typing import Optional
from dotenv import load_dotenv

# .env values never override variables already set in the environment
load_dotenv()


class Config:
    """Configuration management for the fit & context engine"""

    def __init__(self):
        # Bedrock credentials; both keys are needed for the remote strategies
        self.aws_region = self._get_env_var("AWS_REGION", "us-east-1")
        self.aws_access_key_id = self._get_env_var("AWS_ACCESS_KEY_ID")
        self.aws_secret_access_key = self._get_env_var("AWS_SECRET_ACCESS_KEY")

        # Model and request limits
        self.bedrock_model_id = self._get_env_var(
            "BEDROCK_MODEL_ID",
            "anthropic.claude-3-5-sonnet-20240620-v1:0"
        )
        self.bedrock_read_timeout = int(self._get_env_var("BEDROCK_READ_TIMEOUT") or "60")
        self.chat_max_tokens = int(self._get_env_var("CHAT_MAX_TOKENS") or "1024")
        self.analyze_max_tokens = int(self._get_env_var("ANALYZE_MAX_TOKENS") or "2048")

        # Knowledge store
        self.database_url = self._get_env_var("DATABASE_URL")
        self.supabase_database_url = self._get_env_var("SUPABASE_DATABASE_URL")

        # SUPABASE_DATABASE_URL wins when both are set
        self.db_connection_string = self.supabase_database_url or self.database_url

        # Persisted turns replayed per chat exchange
        self.chat_history_limit = int(self._get_env_var("CHAT_HISTORY_LIMIT") or "20")

        self._report_config()

    def _get_env_var(self, var_name: str, default: Optional[str] = None) -> Optional[str]:
        """Read a variable; blank values count as unset"""
        value = os.getenv(var_name, default)
        return value.strip() if value else None

    def _report_config(self):
        """Report which optional integrations are configured"""
        if not self.has_database:
            print("⚠️ No DATABASE_URL or SUPABASE_DATABASE_URL set - using demo candidate data")
        if not self.has_remote_credentials:
            print("⚠️ No AWS credentials set - using local scoring and canned chat replies")
        if self.has_database and self.has_remote_credentials:
            print("✅ Database and Bedrock credentials are set")

    @property
    def has_database(self) -> bool:
        """Check if a database connection string is configured"""
        return bool(self.db_connection_string)

    @property
    def has_remote_credentials(self) -> bool:
        """Check if Bedrock credentials are configured"""
        return bool(self.aws_access_key_id and self.aws_secret_access_key)

    @property
    def is_configured(self) -> bool:
        """Check if every remote integration is configured"""
        return self.has_database and self.has_remote_credentials

    def get_config_status(self) -> dict:
        """Configuration summary without secrets, for the health check and logs"""
        return {
            "aws_region": self.aws_region,
            "bedrock_model_id": self.bedrock_model_id,
            "database_configured": self.has_database,
            "remote_model_configured": self.has_remote_credentials,
            "chat_history_limit": self.chat_history_limit,
            "fully_configured": self.is_configured
        }
