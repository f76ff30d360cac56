"""
Linux Virtual Machine Scale Set resource for Pulumi.

Pulumi has no native binding for this handler, so it is exposed as a dynamic
provider. The engine owns diffing and state; each hook delegates to
LinuxVirtualMachineScaleSetService:
1. check: schema validation, one failure per offending field.
2. diff: changed keys, including values removed from the configuration;
   name, resource group, location and password authentication force a
   replacement.
3. create / update: validate, then CreateOrUpdate and read back.
4. read: an empty ID tells the engine the scale set is gone.
5. delete: Delete and wait.

admin_password is write-only on the Azure side, so it is carried over from
the engine's inputs into outputs and marked secret.

During preview, inputs that depend on other resources arrive as
rpc.UNKNOWN. check skips validation for them and diff reports them as changed.
"""

from dataclasses import dataclass
from typing import Any

import pulumi
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    ReadResult,
    ResourceProvider,
    UpdateResult,
)
from pulumi.runtime import rpc
from pydantic import ValidationError as PydanticValidationError

from vmss.application.services import (
    LinuxVirtualMachineScaleSetService,
    build_scale_set_service,
)
from vmss.configs import get_settings
from vmss.core.exceptions import ValidationError
from vmss.core.mapping import validate_cross_field_rules
from vmss.models.scale_set import FORCE_NEW_FIELDS, LinuxVirtualMachineScaleSetArgs
from vmss.observability import configure_logging

from IAC.configs.base import EnvironmentConfig
from IAC.configs.constants import OS_DISK_DEFAULTS, SOURCE_IMAGE
from IAC.utils.tags import create_tags

# Keys the engine or the API owns
_COMPUTED_KEYS = frozenset({"id", "unique_id"})
# Optional keys Azure fills in when left unset
_API_DEFAULTED_KEYS = frozenset({"computer_name_prefix"})
# List keys that are sets on the Azure side
_UNORDERED_KEYS = frozenset({"admin_ssh_key"})
_WRITE_ONLY_KEYS = ("admin_password",)

FieldPath = tuple[str | int, ...]


def _is_unknown(value: Any) -> bool:
    """True for inputs the engine has not resolved yet (preview)."""
    return isinstance(value, str) and value == rpc.UNKNOWN


def _unknown_paths(value: Any, path: FieldPath = ()) -> list[FieldPath]:
    """Locate unresolved inputs, using pydantic-style locations."""
    if _is_unknown(value):
        return [path]
    if isinstance(value, dict):
        return [
            found
            for key, item in value.items()
            for found in _unknown_paths(item, (*path, key))
        ]
    if isinstance(value, (list, tuple)):
        return [
            found
            for index, item in enumerate(value)
            for found in _unknown_paths(item, (*path, index))
        ]
    return []


def _prune(value: Any) -> Any:
    """Drop None, unresolved entries and engine bookkeeping keys, recursively."""
    if isinstance(value, dict):
        return {
            key: _prune(item)
            for key, item in value.items()
            if item is not None and not _is_unknown(item) and not str(key).startswith("__")
        }
    if isinstance(value, (list, tuple)):
        # Unresolved list items keep their index so error locations still line up
        return [None if _is_unknown(item) else _prune(item) for item in value]
    return value


def _is_unset(value: Any) -> bool:
    return value is None or value is False or value in ("", [], {})


def _differs(desired: Any, actual: Any) -> bool:
    """Compare a desired value with state; unset values (None, False, empty) are equal."""
    if isinstance(desired, dict) or isinstance(actual, dict):
        desired = {} if _is_unset(desired) else desired
        actual = {} if _is_unset(actual) else actual
        if not (isinstance(desired, dict) and isinstance(actual, dict)):
            return True
        return any(
            _differs(desired.get(key), actual.get(key))
            for key in desired.keys() | actual.keys()
        )
    if _is_unset(desired) or _is_unset(actual):
        return not (_is_unset(desired) and _is_unset(actual))
    if isinstance(desired, list):
        if not isinstance(actual, list) or len(desired) != len(actual):
            return True
        return any(_differs(d, a) for d, a in zip(desired, actual))
    return desired != actual


def _sorted_entries(value: Any) -> Any:
    if not isinstance(value, list):
        return value
    return sorted(value, key=lambda entry: sorted((str(k), str(v)) for k, v in entry.items()))


def _key_differs(key: str, desired: Any, actual: Any) -> bool:
    if key in _API_DEFAULTED_KEYS and _is_unset(desired):
        return False
    if key in _UNORDERED_KEYS:
        return _differs(_sorted_entries(desired), _sorted_entries(actual))
    return _differs(desired, actual)


def _parse_args(props: dict[str, Any]) -> LinuxVirtualMachineScaleSetArgs:
    return LinuxVirtualMachineScaleSetArgs.model_validate(_prune(props))


class LinuxVirtualMachineScaleSetProvider(ResourceProvider):
    """Dynamic provider backed by the scale set lifecycle service."""

    def _service(self) -> LinuxVirtualMachineScaleSetService:
        # Built per call: the provider instance is serialized into the Pulumi state
        settings = get_settings()
        configure_logging("DEBUG" if settings.debug else settings.log_level)
        return build_scale_set_service(settings)

    @staticmethod
    def _outputs(state: dict[str, Any], inputs: dict[str, Any]) -> dict[str, Any]:
        outs = dict(state)
        for key in _WRITE_ONLY_KEYS:
            outs[key] = inputs.get(key)
        return outs

    def check(self, _olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        unknown = _unknown_paths(news)
        try:
            args = _parse_args(news)
        except PydanticValidationError as e:
            failures = [
                CheckFailure(".".join(str(part) for part in error["loc"]), error["msg"])
                for error in e.errors()
                if not any(tuple(error["loc"][:len(path)]) == path for path in unknown)
            ]
            return CheckResult(news, failures)

        # Cross-field rules need every value; they run again at create and update
        if unknown:
            return CheckResult(news, [])

        try:
            validate_cross_field_rules(args)
        except ValidationError as e:
            return CheckResult(news, [CheckFailure(e.field or "", e.message)])

        return CheckResult(news, [])

    def diff(self, _id: str, olds: dict[str, Any], news: dict[str, Any]) -> DiffResult:
        unknown = {str(path[0]) for path in _unknown_paths(news) if path}
        actual = _prune(olds)
        try:
            desired = _parse_args(news).model_dump()
        except PydanticValidationError:
            if not unknown:
                raise
            # A required value is still unresolved; only unresolved keys are known to change
            desired = {}

        changed = [
            key
            for key, value in desired.items()
            if key not in _COMPUTED_KEYS
            and key not in unknown
            and _key_differs(key, value, actual.get(key))
        ]
        changed += sorted(unknown - _COMPUTED_KEYS)
        replaces = [key for key in changed if key in FORCE_NEW_FIELDS]

        return DiffResult(
            changes=bool(changed),
            replaces=replaces,
            stables=[],
            delete_before_replace=bool(replaces),
        )

    def create(self, props: dict[str, Any]) -> CreateResult:
        args = _parse_args(props)
        state = self._service().create(args)
        return CreateResult(id_=state["id"], outs=self._outputs(state, props))

    def read(self, id_: str, props: dict[str, Any]) -> ReadResult:
        state = self._service().read(id_)
        if state is None:
            return ReadResult(id_=None, outs={})
        return ReadResult(id_=id_, outs=self._outputs(state, props or {}))

    def update(self, id_: str, _olds: dict[str, Any], news: dict[str, Any]) -> UpdateResult:
        args = _parse_args(news)
        state = self._service().update(id_, args)
        return UpdateResult(outs=self._outputs(state, news))

    def delete(self, id_: str, _props: dict[str, Any]) -> None:
        self._service().delete(id_)


class LinuxVirtualMachineScaleSet(pulumi.dynamic.Resource):
    """Linux virtual machine scale set managed through the dynamic provider."""

    unique_id: pulumi.Output[str]
    computer_name_prefix: pulumi.Output[str]
    instances: pulumi.Output[int]

    def __init__(
        self,
        name: str,
        props: dict[str, Any],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        """
        Declare a scale set.

        Args:
            name: Pulumi resource name
            props: Configuration keyed like LinuxVirtualMachineScaleSetArgs
            opts: Resource options
        """
        full_props = {
            "unique_id": None,
            "computer_name_prefix": None,
            **props,
        }
        secret_opts = pulumi.ResourceOptions(additional_secret_outputs=list(_WRITE_ONLY_KEYS))
        super().__init__(
            LinuxVirtualMachineScaleSetProvider(),
            name,
            full_props,
            pulumi.ResourceOptions.merge(opts, secret_opts),
        )


@dataclass
class ScaleSetOutputs:
    """Output values from scale set component."""
    scale_set_id: pulumi.Output[str]
    unique_id: pulumi.Output[str]


class LinuxScaleSetComponent(pulumi.ComponentResource):
    """
    Linux scale set behind an existing subnet.

    Instances boot from the marketplace image in SOURCE_IMAGE and accept SSH
    key authentication only.
    """

    def __init__(
        self,
        name: str,
        config: EnvironmentConfig,
        subnet_id: pulumi.Input[str],
        health_probe_id: pulumi.Input[str] | None = None,
        computer_name_prefix: str | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:LinuxScaleSet", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        props: dict[str, Any] = {
            "name": name,
            "resource_group_name": config.resource_group_name,
            "location": config.location,
            "sku": config.vm_sku,
            "instances": config.instances,
            "admin_username": config.admin_username,
            "computer_name_prefix": computer_name_prefix,
            "admin_ssh_key": [{
                "username": config.admin_username,
                "public_key": config.ssh_public_key,
            }],
            "network_interface": [{
                "name": f"{name}-nic",
                "primary": True,
                "ip_configuration": [{
                    "name": "internal",
                    "primary": True,
                    "subnet_id": subnet_id,
                }],
            }],
            "os_disk": dict(OS_DISK_DEFAULTS),
            "source_image_reference": dict(SOURCE_IMAGE),
            "upgrade_mode": config.upgrade_mode,
            "zones": list(config.zones),
            "zone_balance": config.is_production and bool(config.zones),
            "tags": create_tags(config.environment, name),
        }
        if config.upgrade_mode == "Automatic":
            props["automatic_os_upgrade_policy"] = {
                "disable_automatic_rollback": False,
                "enable_automatic_os_upgrade": True,
            }
        if config.upgrade_mode == "Rolling":
            props["rolling_upgrade_policy"] = {
                "max_batch_instance_percent": 20,
                "max_unhealthy_instance_percent": 20,
                "max_unhealthy_upgraded_instance_percent": 5,
                "pause_time_between_batches": "PT0S",
                "health_probe_id": health_probe_id,
            }

        self.scale_set = LinuxVirtualMachineScaleSet(
            f"{name}-vmss",
            props,
            opts=child_opts,
        )

        self.register_outputs({
            "scale_set_id": self.scale_set.id,
            "unique_id": self.scale_set.unique_id,
        })

    def get_outputs(self) -> ScaleSetOutputs:
        """Get scale set output values."""
        return ScaleSetOutputs(
            scale_set_id=self.scale_set.id,
            unique_id=self.scale_set.unique_id,
        )
