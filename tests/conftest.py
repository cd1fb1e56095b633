import copy
import os
import sys

import pytest

# Ensure the project root is on sys.path for all tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from vocab_codegen.core.config import GeneratorConfig
from vocab_codegen.core.schema import Field, LookupTables, TypeReference, parse_schema
from vocab_codegen.core.vocabulary import Vocabulary

SCHEMA = "https://schema.org/"
OA = "https://openactive.io/"
BETA = "https://openactive.io/ns-beta#"


SAMPLE_DOCUMENT = {
    "models": {
        "Event": {
            "type": "Event",
            "subClassOf": "https://schema.org/Event",
            "description": ["An event, such as a session or a course."],
            "fields": {
                "name": {
                    "fieldName": "name",
                    "requiredType": "https://schema.org/Text",
                    "order": 2,
                    "derivedFromSchema": True,
                    "description": ["The name of the event"],
                    "example": "Speedball <Advanced>",
                },
                "startDate": {
                    "fieldName": "startDate",
                    "requiredType": "https://schema.org/Date",
                    "order": 3,
                },
                "maximumAttendeeCapacity": {
                    "fieldName": "maximumAttendeeCapacity",
                    "requiredType": "https://schema.org/Integer",
                    "order": 4,
                    "example": 30,
                },
                "eventStatus": {
                    "fieldName": "eventStatus",
                    "requiredType": "https://schema.org/EventStatusType",
                    "order": 6,
                },
                "level": {
                    "fieldName": "level",
                    "requiredType": "https://openactive.io/RequiredStatusType",
                    "order": 7,
                },
                "offers": {
                    "fieldName": "offers",
                    "model": "ArrayOf#Offer",
                    "order": 8,
                },
                "organizer": {
                    "fieldName": "organizer",
                    "model": "#Organization",
                    "alternativeModels": ["#Person"],
                    "order": 9,
                },
                "image": {
                    "fieldName": "image",
                    "requiredType": "https://schema.org/URL",
                    "order": 10,
                    "obsolete": True,
                },
                "duration": {
                    "fieldName": "duration",
                    "memberName": "beta:duration",
                    "requiredType": "https://schema.org/Duration",
                    "order": 5,
                    "extensionPrefix": "beta",
                },
            },
        },
        "Offer": {
            "type": "Offer",
            "derivedFrom": "https://schema.org/Offer",
            "fields": {
                "price": {
                    "fieldName": "price",
                    "requiredType": "https://schema.org/Number",
                    "order": 1,
                },
            },
        },
        "Organization": {
            "type": "Organization",
            "subClassOf": "https://schema.org/Organization",
            "fields": {},
        },
        "Person": {
            "type": "Person",
            "subClassOf": "https://schema.org/Person",
            "fields": {},
        },
        "Concept": {
            "type": "Concept",
            "derivedFrom": "http://www.w3.org/2004/02/skos/core#Concept",
            "fields": {
                "prefLabel": {
                    "fieldName": "prefLabel",
                    "requiredType": "https://schema.org/Text",
                    "order": 1,
                },
            },
        },
    },
    "enums": {
        "RequiredStatusType": {
            "type": "RequiredStatusType",
            "namespace": "https://openactive.io/",
            "comment": ["Whether something is required."],
            "values": [
                "https://openactive.io/Required",
                "https://openactive.io/Optional",
                "https://openactive.io/Unavailable",
            ],
        },
        "EventStatusType": {
            "type": "EventStatusType",
            "namespace": "https://schema.org/",
            "values": [
                "https://schema.org/EventCancelled",
                "https://schema.org/EventScheduled",
            ],
        },
    },
}


@pytest.fixture
def vocabulary():
    return Vocabulary()


@pytest.fixture
def config():
    return GeneratorConfig()


@pytest.fixture
def sample_document():
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def schema_set(sample_document):
    return parse_schema(sample_document)


@pytest.fixture
def tables(schema_set, vocabulary):
    return LookupTables.from_schema_set(schema_set, vocabulary)


def make_field(name="field", order=1, **kwargs):
    """Build a Field from string type references."""
    for key in ("required_type", "model"):
        if isinstance(kwargs.get(key), str):
            kwargs[key] = TypeReference.parse(kwargs[key])
    for key in ("alternative_types", "alternative_models"):
        if key in kwargs:
            kwargs[key] = tuple(TypeReference.parse(value) for value in kwargs[key])
    return Field(field_name=name, order=order, **kwargs)


@pytest.fixture
def field_factory():
    return make_field
