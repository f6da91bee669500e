from aws_lambda_powertools import Logger

DEFAULT_SERVICE_NAME = "resort-booking"


def get_logger(service_name: str | None = None) -> Logger:
    return Logger(service=service_name or DEFAULT_SERVICE_NAME)
