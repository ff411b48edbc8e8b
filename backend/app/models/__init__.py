from app.models.teaching_session import TeachingSession  # noqa: F401
