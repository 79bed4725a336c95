"""
Marshmallow schemas turning loosely-typed source data into typed records.
"""

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate

from hanzi_backend.dictionary_manager.record_types import DictionaryEntry, ReferenceEntry


class DefinitionField(fields.Field):
    """A gloss given either as one string or as a list of senses."""

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, str):
            return value
        if isinstance(value, list) and all(isinstance(sense, str) for sense in value):
            return value
        raise ValidationError("Definition must be a string or a list of strings.")


class DictionaryEntrySchema(Schema):
    """One line of the dictionary source. Only `character` is mandatory."""

    class Meta:
        unknown = EXCLUDE

    character = fields.Str(
        required=True,
        validate=validate.Regexp(r"^\s*\S", error="Character cannot be empty"),
    )
    definition = DefinitionField(load_default=None, allow_none=True)
    # A list of readings; any other shape normalizes to an empty reading
    pinyin = fields.Raw(load_default=None, allow_none=True)
    radical = fields.Str(load_default=None, allow_none=True)
    # Superseded by the reference table, kept so it can be logged when it disagrees
    hsk = fields.Raw(load_default=None, allow_none=True)
    variants = fields.Str(load_default=None, allow_none=True)
    radical_variants = fields.Str(load_default=None, allow_none=True)

    @post_load
    def make_entry(self, data, **kwargs):
        return DictionaryEntry(**data)


class ReferenceEntrySchema(Schema):
    """One value of the reference table mapping."""

    class Meta:
        unknown = EXCLUDE

    level = fields.Int(load_default=None, allow_none=True, validate=validate.Range(min=0))
    script = fields.Str(load_default=None, allow_none=True)
    strokes = fields.Int(load_default=None, allow_none=True, validate=validate.Range(min=1))
    decomp = fields.Str(load_default=None, allow_none=True)
    variant = fields.Str(load_default=None, allow_none=True)

    @post_load
    def make_entry(self, data, **kwargs):
        return ReferenceEntry(**data)
