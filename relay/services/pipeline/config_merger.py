"""
Merge computed values into read-only caller options.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel

from ...core.exceptions import ConfigurationConflict, RelayConfigError
from ...core.interfaces.pipeline import ComputedFields

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigMerger:
    """
    Produces the effective options a stage consumes.

    Caller-supplied options are never mutated. A computed value fills a field
    the caller left unset; when the caller did set it to something else the
    merge is refused rather than resolved.
    """

    def merge(self, options: ModelT, computed: ComputedFields) -> ModelT:
        """
        Overlay computed fields on a copy of the options.

        Raises:
            RelayConfigError: If a computed field is not an option of the model
            ConfigurationConflict: If caller and computed values disagree
        """
        updates = computed.as_dict()
        if not updates:
            return options

        known = type(options).model_fields
        for name, value in updates.items():
            if name not in known:
                raise RelayConfigError(
                    f"Computed option '{name}' is not an option of {type(options).__name__}",
                    context={"origin": computed.origin(name)},
                )
            supplied = getattr(options, name)
            if supplied is not None and supplied != value:
                raise ConfigurationConflict(
                    f"Option '{name}' was given explicitly ({supplied!r}) and also "
                    f"computed by '{computed.origin(name)}' ({value!r})",
                    options=(name,),
                )

        return options.model_copy(update=updates)
