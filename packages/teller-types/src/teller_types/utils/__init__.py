from .export_schema import EXPORTED_MODELS, export_all_schemas, export_model_schema

__all__ = ["EXPORTED_MODELS", "export_all_schemas", "export_model_schema"]
