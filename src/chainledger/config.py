from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./data/chainledger.db"
    data_dir: str = "data"
    symbol_overrides_file: str = ""
    etherscan_api_key: str = ""
    fetch_rate_per_second: float = 2.0
    debug: bool = False

    @property
    def output_dir(self) -> Path:
        return Path(self.data_dir) / "output"

    @property
    def symbol_overrides_path(self) -> Path:
        if self.symbol_overrides_file:
            return Path(self.symbol_overrides_file)
        return Path(self.data_dir) / "symbol-overrides.json"


settings = Settings()
