from aws_cdk import (
    aws_ecs as ecs,
    aws_efs as efs,
    RemovalPolicy,
    Stack,
)
from constructs import Construct

from .config import AppConfig
from .topology import Role, resource_id

JENKINS_HOME_DIR = "jenkins-home"
JENKINS_UID = "1000"
JENKINS_GID = "1000"


class ECSCluster(Construct):

    def __init__(self, scope: Stack, app_config: AppConfig) -> None:
        super().__init__(scope, "ECSCluster")
        self.app_name = app_config.app_name

    def add_cluster(self) -> ecs.Cluster:
        # No VPC is passed in, the cluster creates and owns one
        self.cluster = ecs.Cluster(
            self,
            resource_id(self.app_name, Role.CLUSTER),
            cluster_name=self.app_name,
        )
        self.vpc = self.cluster.vpc
        return self.cluster

    def add_file_system(self) -> efs.FileSystem:
        self.filesystem = efs.FileSystem(
            self,
            resource_id(self.app_name, Role.FILE_SYSTEM),
            vpc=self.vpc,
            file_system_name=self.app_name,
            removal_policy=RemovalPolicy.DESTROY,
        )
        return self.filesystem

    def add_access_point(self) -> efs.AccessPoint:
        # Mount visibility is the whole jenkins-home tree, not a narrower subdirectory
        self.access_point = self.filesystem.add_access_point(
            resource_id(self.app_name, Role.ACCESS_POINT),
            path=f"/{JENKINS_HOME_DIR}",
            posix_user=efs.PosixUser(uid=JENKINS_UID, gid=JENKINS_GID),
            create_acl=efs.Acl(
                owner_uid=JENKINS_UID, owner_gid=JENKINS_GID, permissions="755"
            ),
        )
        return self.access_point
