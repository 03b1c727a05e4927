import os
from configparser import ConfigParser
from dataclasses import dataclass
from typing import Mapping, Optional

from aws_cdk import Environment


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class AppConfig:
    app_name: str
    account: Optional[str] = None
    region: Optional[str] = None

    @property
    def stack_id(self) -> str:
        return f"{self.app_name}-app-stack"

    def environment(self) -> Environment:
        return Environment(account=self.account, region=self.region)


def load_config(
    path: str = "config.ini", environ: Optional[Mapping[str, str]] = None
) -> AppConfig:
    """
    Reads the application identity from `path`, letting APP_NAME, DEV_ACCOUNT
    and DEV_REGION from the environment take precedence.
    """
    if environ is None:
        environ = os.environ

    config = ConfigParser()
    config.read(path)

    app_name = environ.get("APP_NAME") or config["DEFAULT"].get("app_name", "")
    app_name = app_name.strip()
    if not app_name:
        raise ConfigurationError(
            f"app_name is not set in {path} and APP_NAME is empty"
        )

    # Same fallbacks the CDK toolkit provides when running `cdk synth`
    account = environ.get("DEV_ACCOUNT") or environ.get("CDK_DEFAULT_ACCOUNT")
    region = environ.get("DEV_REGION") or environ.get("CDK_DEFAULT_REGION")

    return AppConfig(app_name=app_name, account=account or None, region=region or None)
