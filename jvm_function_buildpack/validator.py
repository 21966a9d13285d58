"""Schema validation for documents handed back to the platform."""

from __future__ import annotations

import json
from importlib import resources

from jsonschema import Draft202012Validator

# --- Schema loaders ---------------------------------------------------------


def _load_schema(package: str, resource_name: str) -> dict:
    with resources.files(package).joinpath(resource_name).open("r", encoding="utf-8") as f:
        return json.load(f)


def _launch_schema() -> dict:
    return _load_schema("jvm_function_buildpack.schema", "launch.schema.json")


# --- Public validators ------------------------------------------------------


def validate_launch(data: dict) -> None:
    Draft202012Validator(_launch_schema()).validate(data)
