from .dynamodb import cancellation_codes, error_code, paginate, to_attribute_values

__all__ = ["cancellation_codes", "error_code", "paginate", "to_attribute_values"]
