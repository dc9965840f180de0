"""Service configuration definition."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceConfig(BaseSettings):
    """
    Defines the defaults for new jail sessions, loaded from environment
    variables or a .env file.
    """

    # We do not specify env_file here.
    # Environment loading is handled explicitly in main.py via load_dotenv.
    model_config = SettingsConfigDict(extra="ignore")

    # Jail boundary for new sessions.
    JAIL_ROOT: str = "/"
    # Initial working directory of new sessions, relative to the jail root.
    JAIL_CWD: str = "/"
    # Chunk size used when iterating over read streams.
    JAIL_READ_CHUNK_SIZE: int = Field(default=64 * 1024, gt=0)
