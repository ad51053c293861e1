from json import loads

from arm_static import TYPESPEC_GENERATED_FIELD


class SwaggerDocument(object):
    """
    Only the parts of an OpenAPI document the label checks look at.
    A missing or non-object "info" section is treated as empty.
    """

    def __init__(self, info=None):
        self.info = info if isinstance(info, dict) else {}

    @classmethod
    def parse(cls, text):
        data = loads(text)
        if not isinstance(data, dict):
            return cls()
        return cls(data.get("info"))

    @property
    def typespec_generated(self):
        """
        :return: Optional[bool] value of info.x-typespec-generated
        """
        value = self.info.get(TYPESPEC_GENERATED_FIELD)
        if value is None:
            return None
        # any value other than false, 0 or "" marks the document, even an empty list or object
        return value not in (False, 0, "")


def is_generated_from_typespec(text):
    # absent and false both mean the file was hand written
    return bool(SwaggerDocument.parse(text).typespec_generated)
