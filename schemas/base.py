from marshmallow import fields, pre_load

class BlankToNoneMixin:
    """Treat empty strings coming from HTML forms as missing values."""

    @pre_load
    def blank_to_none(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        return {key: (None if value == '' else value) for key, value in data.items()}

class Money(fields.Decimal):
    """Two-place Decimal on load, plain JSON number on dump."""

    def __init__(self, **kwargs):
        super().__init__(places=2, **kwargs)

    def _serialize(self, value, attr, obj, **kwargs):
        value = super()._serialize(value, attr, obj, **kwargs)
        return None if value is None else float(value)
