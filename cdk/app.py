#!/usr/bin/env python3

import logging
from os import getenv

from aws_cdk import App
from dotenv import load_dotenv

from jenkins_fargate.config import load_config
from jenkins_fargate.jenkins_stack import JenkinsStack, log_deployment_order

load_dotenv()
logging.basicConfig(
    level=getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(name)s %(levelname)s: %(message)s",
)

app_config = load_config("config.ini")

app = App()
stack = JenkinsStack(
    app,
    app_config.stack_id,
    app_config=app_config,
    env=app_config.environment(),
)

assembly = app.synth()
log_deployment_order(assembly, stack.stack_name)
