import re
from enum import Enum
from graphlib import TopologicalSorter
from typing import Any, Dict, List, Mapping, Set, Tuple


class Role(Enum):
    CLUSTER = "cluster"
    FILE_SYSTEM = "efs"
    ACCESS_POINT = "ap"
    TASK_DEFINITION = "task"
    SERVICE = "service"
    LOAD_BALANCER = "elb"
    LISTENER = "listener"
    TARGET_GROUP = "target"


# Each role and the roles that must already be assembled before it
DEPENDENCIES: Dict[Role, Tuple[Role, ...]] = {
    Role.CLUSTER: (),
    Role.FILE_SYSTEM: (Role.CLUSTER,),
    Role.ACCESS_POINT: (Role.FILE_SYSTEM,),
    Role.TASK_DEFINITION: (Role.ACCESS_POINT,),
    Role.SERVICE: (Role.CLUSTER, Role.TASK_DEFINITION),
    Role.LOAD_BALANCER: (Role.SERVICE,),
    Role.LISTENER: (Role.LOAD_BALANCER,),
    Role.TARGET_GROUP: (Role.LISTENER, Role.SERVICE),
}

_SUB_REFERENCE = re.compile(r"\$\{([A-Za-z0-9]+)(?:\.[A-Za-z0-9.]+)?\}")


def resource_id(app_name: str, role: Role) -> str:
    return f"{app_name}-{role.value}"


def assembly_order(
    dependencies: Mapping[Role, Tuple[Role, ...]] = DEPENDENCIES
) -> List[Role]:
    return list(TopologicalSorter(dependencies).static_order())


def template_dependencies(template: Mapping[str, Any]) -> Dict[str, Set[str]]:
    """
    Map every logical id in a synthesized CloudFormation template to the
    logical ids it references through Ref, Fn::GetAtt, Fn::Sub or DependsOn.

    References to parameters, pseudo parameters and anything else outside
    the template's Resources section are dropped.
    """
    resources = template.get("Resources", {})
    edges: Dict[str, Set[str]] = {}

    for logical_id, resource in resources.items():
        found: Set[str] = set()
        _collect_references(resource.get("Properties", {}), found)

        depends_on = resource.get("DependsOn", [])
        if isinstance(depends_on, str):
            depends_on = [depends_on]
        found.update(depends_on)

        edges[logical_id] = {
            ref for ref in found if ref in resources and ref != logical_id
        }

    return edges


def deployment_order(template: Mapping[str, Any]) -> List[str]:
    return list(TopologicalSorter(template_dependencies(template)).static_order())


def _collect_references(value: Any, found: Set[str]) -> None:
    if isinstance(value, dict):
        for key, inner in value.items():
            if key == "Ref" and isinstance(inner, str):
                found.add(inner)
            elif key == "Fn::GetAtt":
                if isinstance(inner, str):
                    found.add(inner.split(".", 1)[0])
                elif isinstance(inner, list) and inner:
                    found.add(inner[0])
            elif key == "Fn::Sub":
                text = inner[0] if isinstance(inner, list) else inner
                if isinstance(text, str):
                    found.update(_SUB_REFERENCE.findall(text))
                if isinstance(inner, list) and len(inner) > 1:
                    _collect_references(inner[1], found)
            else:
                _collect_references(inner, found)
    elif isinstance(value, list):
        for item in value:
            _collect_references(item, found)
