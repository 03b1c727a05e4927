from aws_cdk import (
    aws_elasticloadbalancingv2 as elbv2,
    Duration,
    Stack,
)
from constructs import Construct

from .config import AppConfig
from .ecs import ECSCluster
from .jenkins_controller import JenkinsController, JENKINS_PORT
from .topology import Role, resource_id

LISTENER_PORT = 80
HEALTH_CHECK_PATH = "/login"


class LoadBalancer(Construct):

    def __init__(
        self,
        scope: Stack,
        app_config: AppConfig,
        ecs_cluster: ECSCluster,
        controller: JenkinsController,
    ) -> None:
        super().__init__(scope, "LoadBalancer")
        self.app_name = app_config.app_name
        self.ecs_cluster = ecs_cluster
        self.controller = controller

    def add_load_balancer(self) -> elbv2.ApplicationLoadBalancer:
        self.load_balancer = elbv2.ApplicationLoadBalancer(
            self,
            resource_id(self.app_name, Role.LOAD_BALANCER),
            load_balancer_name=self.app_name,
            vpc=self.ecs_cluster.vpc,
            internet_facing=True,
        )
        return self.load_balancer

    def add_listener(self) -> elbv2.ApplicationListener:
        # Plain HTTP; TLS on 443 needs a certificate and is not set up here
        self.listener = self.load_balancer.add_listener(
            resource_id(self.app_name, Role.LISTENER), port=LISTENER_PORT
        )
        return self.listener

    def add_target_group(self) -> elbv2.ApplicationTargetGroup:
        self.target_group = elbv2.ApplicationTargetGroup(
            self,
            resource_id(self.app_name, Role.TARGET_GROUP),
            vpc=self.ecs_cluster.vpc,
            port=JENKINS_PORT,
            targets=[self.controller.service],
            deregistration_delay=Duration.seconds(10),
            health_check=elbv2.HealthCheck(path=HEALTH_CHECK_PATH),
        )
        self.listener.add_target_groups(
            resource_id(self.app_name, Role.TARGET_GROUP),
            target_groups=[self.target_group],
        )
        return self.target_group
