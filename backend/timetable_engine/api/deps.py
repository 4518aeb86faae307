from timetable_engine.core.config import Settings, get_settings


def get_engine_settings() -> Settings:
    return get_settings()
