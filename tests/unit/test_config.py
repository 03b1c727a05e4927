import pytest

from jenkins_fargate.config import AppConfig, ConfigurationError, load_config


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[DEFAULT]\napp_name = jenkins\n")
    return str(path)


def test_app_name_from_config_file(config_file):
    app_config = load_config(config_file, environ={})

    assert app_config == AppConfig(app_name="jenkins")
    assert app_config.stack_id == "jenkins-app-stack"


def test_environment_overrides_config_file(config_file):
    app_config = load_config(
        config_file,
        environ={
            "APP_NAME": "ci",
            "DEV_ACCOUNT": "123456789012",
            "DEV_REGION": "eu-west-1",
        },
    )

    assert app_config.app_name == "ci"
    assert app_config.account == "123456789012"
    assert app_config.region == "eu-west-1"


def test_account_and_region_fall_back_to_cdk_defaults(config_file):
    app_config = load_config(
        config_file,
        environ={
            "CDK_DEFAULT_ACCOUNT": "210987654321",
            "CDK_DEFAULT_REGION": "us-west-2",
        },
    )

    assert app_config.account == "210987654321"
    assert app_config.region == "us-west-2"


def test_missing_config_file_uses_environment(tmp_path):
    app_config = load_config(str(tmp_path / "absent.ini"), environ={"APP_NAME": "demo"})

    assert app_config.app_name == "demo"
    assert app_config.account is None
    assert app_config.region is None


@pytest.mark.parametrize("app_name", ["", "   "], ids=["empty", "blank"])
def test_blank_app_name_is_rejected(tmp_path, app_name):
    path = tmp_path / "config.ini"
    path.write_text(f"[DEFAULT]\napp_name = {app_name}\n")

    with pytest.raises(ConfigurationError):
        load_config(str(path), environ={})


def test_environment_passes_account_and_region():
    env = AppConfig(app_name="ci", account="123456789012", region="us-east-1").environment()

    assert env.account == "123456789012"
    assert env.region == "us-east-1"
