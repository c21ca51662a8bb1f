"""Application configuration loaded from environment variables and .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from restraint_bond.core.bonding.config import BondConfig


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./dev.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Bonding
    BOND_BASE_LEVEL: int = 1
    BOND_LEVEL_GIVE_NAME: int = 3
    BOND_LEVEL_FIRST: int = 1
    BOND_LEVEL_LOW: int = 2
    BOND_LEVEL_MEDIUM: int = 3
    BOND_LEVEL_HIGH: int = 4
    BOND_LEVEL_XHIGH: int = 6
    BOND_LEVEL_STOP_CUT: int = 5
    BOND_LEVEL_STOP_STRUGGLE: int = 6
    BOND_LEVEL_STOP_REMOVE: int = 7
    BOND_LEVEL_LOCK_URGE: int = 5
    BOND_BASE_RATE: float = 1.07
    BOND_LOCK_RATE: float = 1.01
    BOND_ALWAYS_ALLOW_RENAMING: bool = False

    TEXT_LANGUAGE: str = "EN"

    def bond_config(self) -> BondConfig:
        """설정값 → 코어 BondConfig"""
        return BondConfig(
            base_level=self.BOND_BASE_LEVEL,
            level_give_name=self.BOND_LEVEL_GIVE_NAME,
            level_first=self.BOND_LEVEL_FIRST,
            level_low=self.BOND_LEVEL_LOW,
            level_medium=self.BOND_LEVEL_MEDIUM,
            level_high=self.BOND_LEVEL_HIGH,
            level_xhigh=self.BOND_LEVEL_XHIGH,
            level_stop_cut=self.BOND_LEVEL_STOP_CUT,
            level_stop_struggle=self.BOND_LEVEL_STOP_STRUGGLE,
            level_stop_remove=self.BOND_LEVEL_STOP_REMOVE,
            level_lock_urge=self.BOND_LEVEL_LOCK_URGE,
            base_rate=self.BOND_BASE_RATE,
            lock_rate=self.BOND_LOCK_RATE,
            always_allow_renaming=self.BOND_ALWAYS_ALLOW_RENAMING,
        )


settings = Settings()
