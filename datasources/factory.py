"""
Factory for creating the observation source based on configuration.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from config import Settings
from datasources.base import ObservationSource
from datasources.memory import InMemoryObservationSource


class DataSourceFactory:

    @staticmethod
    def create(config: Settings) -> ObservationSource:
        if config.database_url:
            from database import init_database, init_db
            from datasources.sql import SqlObservationSource

            init_database(config.database_url)
            init_db()
            return SqlObservationSource()
        if config.observations_file:
            return InMemoryObservationSource.from_file(config.observations_file)
        return InMemoryObservationSource()
