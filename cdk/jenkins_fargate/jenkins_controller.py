from aws_cdk import (
    aws_ec2 as ec2,
    aws_ecs as ecs,
    aws_logs as logs,
    Duration,
    RemovalPolicy,
    Stack,
)
from constructs import Construct

from .config import AppConfig
from .ecs import ECSCluster, JENKINS_HOME_DIR
from .topology import Role, resource_id

JENKINS_IMAGE = "jenkins/jenkins:lts"
JENKINS_PORT = 8080
NFS_PORT = 2049


class JenkinsController(Construct):

    def __init__(
        self,
        scope: Stack,
        app_config: AppConfig,
        ecs_cluster: ECSCluster,
    ) -> None:
        super().__init__(scope, "Controller")
        self.app_name = app_config.app_name
        self.ecs_cluster = ecs_cluster

    def add_task_definition(self) -> ecs.FargateTaskDefinition:
        self.task_definition = ecs.FargateTaskDefinition(
            self,
            resource_id(self.app_name, Role.TASK_DEFINITION),
            family=self.app_name,
            cpu=1024,
            memory_limit_mib=2048,
        )

        self.task_definition.add_volume(
            name=JENKINS_HOME_DIR,
            efs_volume_configuration=ecs.EfsVolumeConfiguration(
                file_system_id=self.ecs_cluster.filesystem.file_system_id,
                transit_encryption="ENABLED",
                authorization_config=ecs.AuthorizationConfig(
                    access_point_id=self.ecs_cluster.access_point.access_point_id,
                    iam="ENABLED",
                ),
            ),
        )

        # Torn down with the rest of the stack, like the file system
        self.log_group = logs.LogGroup(
            self,
            "LogGroup",
            retention=logs.RetentionDays.ONE_MONTH,
            removal_policy=RemovalPolicy.DESTROY,
        )

        self.container = self.task_definition.add_container(
            self.app_name,
            image=ecs.ContainerImage.from_registry(JENKINS_IMAGE),
            logging=ecs.LogDrivers.aws_logs(
                stream_prefix="jenkins",
                log_group=self.log_group,
            ),
            port_mappings=[ecs.PortMapping(container_port=JENKINS_PORT)],
        )

        self.container.add_mount_points(
            ecs.MountPoint(
                container_path="/var/jenkins_home",
                source_volume=JENKINS_HOME_DIR,
                read_only=False,
            )
        )
        return self.task_definition

    def add_service(self) -> ecs.FargateService:
        # Deploys replace the single task outright; state lives on EFS.
        # Creation failures here are usually down to the VPC settings.
        self.service = ecs.FargateService(
            self,
            resource_id(self.app_name, Role.SERVICE),
            service_name=self.app_name,
            cluster=self.ecs_cluster.cluster,
            task_definition=self.task_definition,
            desired_count=1,
            min_healthy_percent=0,
            max_healthy_percent=100,
            health_check_grace_period=Duration.minutes(5),
        )

        self.service.connections.allow_to(
            self.ecs_cluster.filesystem, ec2.Port.tcp(NFS_PORT)
        )
        return self.service
