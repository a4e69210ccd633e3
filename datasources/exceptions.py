# datasources/exceptions.py

class DataSourceError(Exception):
    kind = "data_source_error"


class DataSourceUnavailable(DataSourceError):
    kind = "data_source_unavailable"


class QueryTimeout(DataSourceError):
    kind = "query_timeout"


class InvalidRecord(DataSourceError):
    kind = "invalid_record"
