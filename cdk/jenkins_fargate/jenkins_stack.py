import logging
from typing import Callable, Dict

from aws_cdk import IResource, Stack, Tags
from constructs import Construct

from .config import AppConfig
from .ecs import ECSCluster
from .jenkins_controller import JenkinsController
from .load_balancer import LoadBalancer
from .topology import DEPENDENCIES, Role, assembly_order, deployment_order

logger = logging.getLogger(__name__)

APP_TAG_KEY = "AppName"


class JenkinsStack(Stack):

    def __init__(
        self, scope: Construct, id: str, *, app_config: AppConfig, **kwargs
    ) -> None:
        super().__init__(scope, id, **kwargs)
        self.app_config = app_config

        logger.info("Assembling Jenkins topology for %s", app_config.app_name)

        ecs_cluster = ECSCluster(self, app_config=app_config)
        controller = JenkinsController(
            self,
            app_config=app_config,
            ecs_cluster=ecs_cluster,
        )
        load_balancer = LoadBalancer(
            self,
            app_config=app_config,
            ecs_cluster=ecs_cluster,
            controller=controller,
        )

        builders: Dict[Role, Callable[[], IResource]] = {
            Role.CLUSTER: ecs_cluster.add_cluster,
            Role.FILE_SYSTEM: ecs_cluster.add_file_system,
            Role.ACCESS_POINT: ecs_cluster.add_access_point,
            Role.TASK_DEFINITION: controller.add_task_definition,
            Role.SERVICE: controller.add_service,
            Role.LOAD_BALANCER: load_balancer.add_load_balancer,
            Role.LISTENER: load_balancer.add_listener,
            Role.TARGET_GROUP: load_balancer.add_target_group,
        }

        self.resources: Dict[Role, IResource] = {}
        for role in assembly_order():
            missing = [dep.name for dep in DEPENDENCIES[role] if dep not in self.resources]
            if missing:
                raise ValueError(
                    f"cannot build {role.name} before {', '.join(missing)}"
                )
            resource = builders[role]()
            logger.debug("Built %s (%s)", resource.node.id, role.name)
            self.add_app_tag(resource)
            self.resources[role] = resource

        self.add_app_tag(ecs_cluster.vpc)

    def add_app_tag(self, resource: Construct) -> None:
        Tags.of(resource).add(APP_TAG_KEY, self.app_config.app_name)


def log_deployment_order(assembly, stack_name: str) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    template = assembly.get_stack_by_name(stack_name).template
    logger.debug("Deployment order: %s", ", ".join(deployment_order(template)))
