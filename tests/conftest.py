import pytest
from aws_cdk import App
from aws_cdk.assertions import Template

from jenkins_fargate.config import AppConfig
from jenkins_fargate.jenkins_stack import JenkinsStack


@pytest.fixture(scope="module")
def make_stack():
    def _make_stack(app_name):
        app_config = AppConfig(app_name=app_name)
        return JenkinsStack(App(), app_config.stack_id, app_config=app_config)

    return _make_stack


@pytest.fixture(scope="module")
def stack(make_stack):
    return make_stack("ci")


@pytest.fixture(scope="module")
def template(stack):
    return Template.from_stack(stack)
