class URLValuesError(Exception):
    pass


class TypeMismatchError(URLValuesError):
    def __init__(self, kind: str):
        super().__init__(f"expected string/mapping/record but got {kind!r}")


class CustomEncodeError(URLValuesError):
    def __init__(self, key: str, message: str):
        super().__init__(f"encode_values ({key!r}): {message}")


class RecordEncodeError(URLValuesError):
    def __init__(self, message: str):
        super().__init__(f"encode record: {message}")


class QueryParseError(URLValuesError):
    def __init__(self, message: str):
        super().__init__(f"parse query: {message}")


class ConfigError(URLValuesError):
    def __init__(self, message: str):
        super().__init__(f"config error: {message}")
