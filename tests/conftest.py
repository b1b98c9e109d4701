"""Shared fixtures for idl_codegen tests."""

import copy

import pytest

from idl_codegen.codegen.core.config import load_config
from idl_codegen.codegen.core.document import convert_document
from idl_codegen.codegen.core.visitor import Context


SAMPLE_DOCUMENT = {
    "namespace": "greeting.v1",
    "description": "Greeting service.",
    "annotations": [{"name": "version", "arguments": {"value": "1.0.0"}}],
    "aliases": [
        {"name": "UUID", "type": "string", "description": "Unique identifier."},
    ],
    "types": [
        {
            "name": "Person",
            "description": "A person to greet.",
            "fields": [
                {"name": "id", "type": "UUID"},
                {"name": "name", "type": "string", "default": "World"},
                {"name": "age", "type": "u8?"},
                {"name": "tags", "type": "[string]"},
                {"name": "born", "type": "datetime?"},
                {"name": "mood", "type": "Mood", "default": "happy"},
            ],
        },
    ],
    "enums": [
        {
            "name": "Mood",
            "values": [
                {"name": "happy", "display": "Happy"},
                {"name": "sad", "index": 5},
            ],
        },
    ],
    "unions": [
        {"name": "Animal", "types": ["Person", "string"]},
    ],
    "roles": [
        {
            "name": "Greeter",
            "description": "Greets people.",
            "annotations": ["service"],
            "operations": [
                {
                    "name": "sayHello",
                    "description": "Say hello to someone.",
                    "parameters": [{"name": "to", "type": "Person"}],
                    "returns": "string",
                },
                {"name": "wave", "parameters": [{"name": "type", "type": "string"}]},
                {"name": "internal", "annotations": ["nocode"]},
            ],
        },
        {
            "name": "Repository",
            "annotations": ["provider"],
            "operations": [
                {
                    "name": "load",
                    "parameters": [{"name": "id", "type": "UUID"}],
                    "returns": "Person",
                },
                {"name": "list", "returns": "[Person]"},
                {"name": "purge", "annotations": ["nocode"]},
            ],
        },
        {"name": "Notes", "operations": [{"name": "note"}]},
    ],
}


@pytest.fixture
def sample_document():
    """A fresh copy of the sample model document."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def namespace(sample_document):
    """The sample document converted to a namespace."""
    return convert_document(sample_document)


@pytest.fixture
def go_config():
    """Default Go generator configuration."""
    return load_config("go")


@pytest.fixture
def context(go_config, namespace):
    """Context positioned at the sample namespace."""
    return Context(go_config, namespace)
