"""Service layer — composes domain guards and reports ServiceResult."""
