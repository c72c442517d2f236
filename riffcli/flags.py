"""Common flag names and the namespace flags shared by commands."""

from __future__ import annotations

from typing import Any

from riffcli.command import Command
from riffcli.fielderrors import err_multiple_one_of

__all__ = [
    "ALL_FLAG_NAME",
    "ALL_NAMESPACES_FLAG_NAME",
    "APPLICATION_REF_FLAG_NAME",
    "ARTIFACT_FLAG_NAME",
    "BOOTSTRAP_SERVERS_FLAG_NAME",
    "CACHE_SIZE_FLAG_NAME",
    "CONFIG_FLAG_NAME",
    "CONFIGURATION_REF_FLAG_NAME",
    "CONTAINER_REF_FLAG_NAME",
    "CONTENT_TYPE_FLAG_NAME",
    "DEFAULT_IMAGE_PREFIX_FLAG_NAME",
    "DIRECTORY_FLAG_NAME",
    "DOCKER_HUB_FLAG_NAME",
    "DRY_RUN_FLAG_NAME",
    "ENV_FLAG_NAME",
    "ENV_FROM_FLAG_NAME",
    "FUNCTION_REF_FLAG_NAME",
    "GCR_FLAG_NAME",
    "GIT_REPO_FLAG_NAME",
    "GIT_REVISION_FLAG_NAME",
    "HANDLER_FLAG_NAME",
    "IMAGE_FLAG_NAME",
    "INPUT_FLAG_NAME",
    "INVOKER_FLAG_NAME",
    "KUBE_CONFIG_FLAG_NAME",
    "KUBE_CONFIG_FLAG_NAME_DEPRECATED",
    "LIMIT_CPU_FLAG_NAME",
    "LIMIT_MEMORY_FLAG_NAME",
    "LOCAL_PATH_FLAG_NAME",
    "NAMESPACE_FLAG_NAME",
    "NO_COLOR_FLAG_NAME",
    "OUTPUT_FLAG_NAME",
    "PROVIDER_FLAG_NAME",
    "REGISTRY_FLAG_NAME",
    "REGISTRY_USER_FLAG_NAME",
    "SERVICE_REF_FLAG_NAME",
    "SET_DEFAULT_IMAGE_PREFIX_FLAG_NAME",
    "SHELL_FLAG_NAME",
    "SINCE_FLAG_NAME",
    "SUB_PATH_FLAG_NAME",
    "TAIL_FLAG_NAME",
    "WAIT_TIMEOUT_FLAG_NAME",
    "COMPLETION_ANNOTATION",
    "all_namespaces_flag",
    "namespace_flag",
    "strip_dash",
]

ALL_FLAG_NAME = "--all"
ALL_NAMESPACES_FLAG_NAME = "--all-namespaces"
APPLICATION_REF_FLAG_NAME = "--application-ref"
ARTIFACT_FLAG_NAME = "--artifact"
BOOTSTRAP_SERVERS_FLAG_NAME = "--bootstrap-servers"
CACHE_SIZE_FLAG_NAME = "--cache-size"
CONFIG_FLAG_NAME = "--config"
CONFIGURATION_REF_FLAG_NAME = "--configuration-ref"
CONTAINER_REF_FLAG_NAME = "--container-ref"
CONTENT_TYPE_FLAG_NAME = "--content-type"
DEFAULT_IMAGE_PREFIX_FLAG_NAME = "--default-image-prefix"
DIRECTORY_FLAG_NAME = "--directory"
DOCKER_HUB_FLAG_NAME = "--docker-hub"
DRY_RUN_FLAG_NAME = "--dry-run"
ENV_FLAG_NAME = "--env"
ENV_FROM_FLAG_NAME = "--env-from"
FUNCTION_REF_FLAG_NAME = "--function-ref"
GCR_FLAG_NAME = "--gcr"
GIT_REPO_FLAG_NAME = "--git-repo"
GIT_REVISION_FLAG_NAME = "--git-revision"
HANDLER_FLAG_NAME = "--handler"
IMAGE_FLAG_NAME = "--image"
INPUT_FLAG_NAME = "--input"
INVOKER_FLAG_NAME = "--invoker"
KUBE_CONFIG_FLAG_NAME = "--kubeconfig"
KUBE_CONFIG_FLAG_NAME_DEPRECATED = "--kube-config"
LIMIT_CPU_FLAG_NAME = "--limit-cpu"
LIMIT_MEMORY_FLAG_NAME = "--limit-memory"
LOCAL_PATH_FLAG_NAME = "--local-path"
NAMESPACE_FLAG_NAME = "--namespace"
NO_COLOR_FLAG_NAME = "--no-color"
OUTPUT_FLAG_NAME = "--output"
PROVIDER_FLAG_NAME = "--provider"
REGISTRY_FLAG_NAME = "--registry"
REGISTRY_USER_FLAG_NAME = "--registry-user"
SERVICE_REF_FLAG_NAME = "--service-ref"
SET_DEFAULT_IMAGE_PREFIX_FLAG_NAME = "--set-default-image-prefix"
SHELL_FLAG_NAME = "--shell"
SINCE_FLAG_NAME = "--since"
SUB_PATH_FLAG_NAME = "--sub-path"
TAIL_FLAG_NAME = "--tail"
WAIT_TIMEOUT_FLAG_NAME = "--wait-timeout"

COMPLETION_ANNOTATION = "cobra_annotation_bash_completion_custom"


def strip_dash(flag_name: str) -> str:
    """Remove the first ``--`` from a flag name."""
    return flag_name.replace("--", "", 1)


def namespace_flag(cmd: Command, config: Any, target: Any) -> None:
    """Add ``--namespace``/``-n`` to ``cmd``, bound to ``target.namespace``.

    An empty namespace is defaulted from the kube config before the command runs.
    """
    prior = cmd.pre_run
    flag_name = strip_dash(NAMESPACE_FLAG_NAME)

    def pre_run(command: Command, argv: list) -> None:
        flag = command.flag(flag_name)
        target.namespace = flag.value if flag is not None else target.namespace
        if not target.namespace:
            target.namespace = config.default_namespace()
        if prior is not None:
            prior(command, argv)

    cmd.pre_run = pre_run
    flag = cmd.add_string_flag(
        flag_name, "n", "", "kubernetes `name`space (defaulted from kube config)"
    )
    flag.annotations[COMPLETION_ANNOTATION] = [f"__{config.name}_list_namespaces"]
    target.namespace = ""


def all_namespaces_flag(cmd: Command, config: Any, target: Any) -> None:
    """Add ``--namespace`` and ``--all-namespaces`` to ``cmd``.

    The flags are bound to ``target.namespace`` and ``target.all_namespaces``;
    giving both is an error.
    """
    prior = cmd.pre_run
    all_name = strip_dash(ALL_NAMESPACES_FLAG_NAME)
    namespace_name = strip_dash(NAMESPACE_FLAG_NAME)

    def pre_run(command: Command, argv: list) -> None:
        target.all_namespaces = bool(command.flag(all_name).value)
        if target.all_namespaces:
            namespace = command.flag(namespace_name)
            if namespace is not None and namespace.changed:
                raise err_multiple_one_of(
                    NAMESPACE_FLAG_NAME, ALL_NAMESPACES_FLAG_NAME
                ).to_aggregate()
            target.namespace = ""
        if prior is not None:
            prior(command, argv)

    cmd.pre_run = pre_run
    namespace_flag(cmd, config, target)
    cmd.add_bool_flag(all_name, False, "use all kubernetes namespaces")
    target.all_namespaces = False