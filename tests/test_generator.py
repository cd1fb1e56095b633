import pytest

from vocab_codegen.core.generator import UnresolvedTypeError, generate_code
from vocab_codegen.core.schema import parse_schema
from vocab_codegen.languages.dotnet import (
    DotNetGenerator,
    ResolvedModel,
    create_dotnet_generator,
    render_code_example,
)


@pytest.fixture
def generator():
    return create_dotnet_generator()


@pytest.fixture
def broken_schema_set(sample_document):
    sample_document["models"]["Broken"] = {
        "type": "Broken",
        "subClassOf": "#Event",
        "fields": {
            "thing": {"fieldName": "thing", "requiredType": "#Missing", "order": 1}
        },
    }
    return parse_schema(sample_document)


def test_generator_properties(generator):
    assert isinstance(generator, DotNetGenerator)
    assert generator.language_name == "dotnet"
    assert generator.file_extension == ".cs"
    assert generator.get_dirs() == ["/models/", "/enums/"]
    assert generator.template_exists("model.cs.j2")
    assert generator.template_exists("enum.cs.j2")


def test_generate_file_layout(generator, schema_set):
    files = generator.generate(schema_set)

    assert set(files) == {
        "/models/Event.cs",
        "/models/Offer.cs",
        "/models/Organization.cs",
        "/models/Person.cs",
        "/models/Concept.cs",
        "/enums/RequiredStatusType.cs",
    }


def test_foundation_enums_are_not_rendered(generator, schema_set):
    files = generator.generate(schema_set)
    assert "/enums/EventStatusType.cs" not in files


def test_rendered_class(generator, schema_set):
    code = generator.generate(schema_set)["/models/Event.cs"]

    assert "namespace OpenActive.NET" in code
    assert "[DataContract]" in code
    assert "public partial class Event : Schema.NET.Event" in code
    assert "/// An event, such as a session or a course." in code
    assert (
        'see <see href="https://developer.openactive.io/data-model/types/event" />'
        in code
    )
    assert code.endswith("}\n")


def test_rendered_properties(generator, schema_set):
    code = generator.generate(schema_set)["/models/Event.cs"]

    assert (
        '[DataMember(Name = "name", EmitDefaultValue = false, Order = 2)]' in code
    )
    assert "public new virtual string Name { get; set; }" in code
    assert "public virtual string StartDate { get; set; }" in code
    assert "public virtual int? MaximumAttendeeCapacity { get; set; }" in code
    assert "public virtual List<Offer> Offers { get; set; }" in code
    assert (
        "public virtual SingleValues<Person, Organization> Organizer { get; set; }"
        in code
    )
    assert "[JsonConverter(typeof(ValuesConverter))]" in code


def test_rendered_extension_property(generator, schema_set):
    code = generator.generate(schema_set)["/models/Event.cs"]

    assert (
        '[DataMember(Name = "beta:duration", EmitDefaultValue = false, Order = 1005)]'
        in code
    )
    assert (
        "[JsonConverter(typeof(OpenActiveTimeSpanToISO8601DurationValuesConverter))]"
        in code
    )
    assert "public virtual TimeSpan? Duration { get; set; }" in code


def test_rendered_disinherited_property(generator, schema_set):
    code = generator.generate(schema_set)["/models/Event.cs"]

    assert (
        '[Obsolete("This property is disinherited in this type, and must not be used.", true)]'
        in code
    )
    assert "public override Uri Image { get; set; }" in code
    assert 'Name = "image"' not in code


def test_rendered_examples_are_escaped(generator, schema_set):
    code = generator.generate(schema_set)["/models/Event.cs"]

    assert "/// <example>" in code
    assert "/// <code>" in code
    assert '/// "name": "Speedball &lt;Advanced&gt;"' in code
    assert '/// "maximumAttendeeCapacity": 30' in code


def test_rendered_enum(generator, schema_set):
    code = generator.generate(schema_set)["/enums/RequiredStatusType.cs"]

    assert "[JsonConverter(typeof(StringEnumConverter))]" in code
    assert "public enum RequiredStatusType" in code
    assert '[EnumMember(Value = "https://openactive.io/Required")]' in code
    assert "Required," in code
    assert "Unavailable\n" in code
    assert "Unavailable," not in code
    assert "/// Whether something is required." in code


def test_no_comments(schema_set):
    generator = create_dotnet_generator({"add_comments": False})
    code = generator.generate(schema_set)["/models/Event.cs"]

    assert "An event, such as" not in code
    assert "developer.openactive.io" not in code
    assert "public partial class Event" in code


def test_custom_namespace_and_converter(schema_set):
    generator = create_dotnet_generator(
        {"namespace": "My.Models", "duration_converter": "MyDurationConverter"}
    )
    code = generator.generate(schema_set)["/models/Event.cs"]

    assert "namespace My.Models" in code
    assert "[JsonConverter(typeof(MyDurationConverter))]" in code


def test_property_named_like_its_class_is_renamed(generator):
    schema_set = parse_schema(
        {
            "models": {
                "Level": {
                    "type": "Level",
                    "subClassOf": "https://schema.org/Thing",
                    "fields": {
                        "level": {
                            "fieldName": "level",
                            "requiredType": "https://schema.org/Text",
                            "order": 1,
                        }
                    },
                }
            }
        }
    )
    code = generator.generate(schema_set)["/models/Level.cs"]
    assert "public virtual string Level_1 { get; set; }" in code
    assert 'Name = "level"' in code


def test_rendered_member_names_come_from_compiler(generator, schema_set):
    results = generator.compile(schema_set)
    files = generator.render(results)

    models = [r.resolved for r in results if isinstance(r.resolved, ResolvedModel)]
    assert models
    for model in models:
        code = files[generator.get_model_filename(model)]
        for resolved_field in model.fields:
            assert f" {resolved_field.property_name} {{ get; set; }}" in code


def test_disinheritance_stub_overrides_inherited_name(generator):
    schema_set = parse_schema(
        {
            "models": {
                "Event": {
                    "type": "Event",
                    "subClassOf": "https://schema.org/Event",
                    "fields": {
                        "event": {
                            "fieldName": "event",
                            "requiredType": "https://schema.org/Text",
                            "order": 1,
                            "obsolete": True,
                        },
                        "name": {
                            "fieldName": "name",
                            "requiredType": "https://schema.org/Text",
                            "order": 2,
                        },
                    },
                }
            }
        }
    )
    code = generator.generate(schema_set)["/models/Event.cs"]

    assert "public override string Event { get; set; }" in code
    assert "Event_1" not in code


def test_generate_raises_first_error(generator, broken_schema_set):
    with pytest.raises(UnresolvedTypeError):
        generator.generate(broken_schema_set)


def test_generate_code_success(generator, schema_set):
    result = generate_code(generator, schema_set)

    assert result.success
    assert result.metadata["language"] == "dotnet"
    assert result.metadata["model_count"] == 5
    assert result.metadata["enum_count"] == 2
    assert result.metadata["file_count"] == 6
    assert result.metadata["failed"] == []


def test_generate_code_fails_run_on_model_error(generator, broken_schema_set):
    result = generate_code(generator, broken_schema_set)

    assert not result.success
    assert result.files == {}
    assert len(result.errors) == 1
    assert "Broken.thing" in result.error_message
    assert isinstance(result.exception, UnresolvedTypeError)


def test_generate_code_allow_partial(broken_schema_set):
    generator = create_dotnet_generator({"allow_partial": True})
    result = generate_code(generator, broken_schema_set)

    assert result.success
    assert "/models/Broken.cs" not in result.files
    assert "/models/Event.cs" in result.files
    assert result.metadata["failed"] == ["Broken"]
    assert any("Broken.thing" in warning for warning in result.warnings)


def test_generate_code_reports_extension_notices(generator, sample_document):
    sample_document["models"]["Event"]["fields"]["attendeeInstructions"] = {
        "fieldName": "attendeeInstructions",
        "requiredType": "https://openactive.io/Unknown",
        "extensionPrefix": "beta",
        "order": 11,
    }
    result = generate_code(generator, parse_schema(sample_document))

    assert result.success
    assert any("Unknown" in warning for warning in result.warnings)
    assert (
        "public virtual Schema.NET.Unknown AttendeeInstructions { get; set; }"
        in result.files["/models/Event.cs"]
    )


def test_format_code_collapses_blank_lines(generator):
    raw = "\n\nusing System;   \n\n\n\nnamespace X\n{\t\n}\n\n"

    assert generator.format_code(raw) == "using System;\n\nnamespace X\n{\n}\n"


def test_validate_schema_set_warnings(generator):
    schema_set = parse_schema(
        {
            "models": {
                "Empty": {"type": "Empty", "subClassOf": "#Event", "fields": {}},
                "Clash": {
                    "type": "Clash",
                    "subClassOf": "#Event",
                    "fields": {
                        "a": {"requiredType": "https://schema.org/Text", "order": 1},
                        "b": {"requiredType": "https://schema.org/Text", "order": 1},
                    },
                },
            }
        }
    )
    warnings = generator.validate_schema_set(schema_set)

    assert any("Empty" in warning and "no fields" in warning for warning in warnings)
    assert any("duplicate field orders" in warning for warning in warnings)


@pytest.mark.parametrize(
    "example, required_type, expected",
    [
        ("abc", "https://schema.org/Text", ["<code>", '"f": "abc"', "</code>"]),
        (5, "https://schema.org/Integer", ["<code>", '"f": 5', "</code>"]),
        (1.5, "https://schema.org/Float", ["<code>", '"f": 1.5', "</code>"]),
        (30.0, "https://schema.org/Float", ["<code>", '"f": 30', "</code>"]),
        (30.0, "https://schema.org/Text", ["<code>", '"f": "30"', "</code>"]),
        (5, "https://schema.org/Text", ["<code>", '"f": "5"', "</code>"]),
    ],
)
def test_render_code_example_scalars(example, required_type, expected):
    assert render_code_example(example, "f", required_type) == expected


def test_render_code_example_object():
    lines = render_code_example({"@type": "Place"}, "location")
    assert lines[0] == "<code>"
    assert lines[1] == '"location": {'
    assert lines[2] == '  "@type": "Place"'
    assert lines[-1] == "</code>"


def test_render_code_example_whole_floats_inside_objects():
    lines = render_code_example({"price": 30.0, "rate": 0.5}, "offer")
    assert '  "price": 30,' in lines
    assert '  "rate": 0.5' in lines
