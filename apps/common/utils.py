"""
Common utility functions for API responses and money handling
"""
from decimal import Decimal, ROUND_HALF_UP

from rest_framework.response import Response
from rest_framework import status

CENT = Decimal('0.01')


def to_decimal(value) -> Decimal:
    """Convert ints, floats and strings to Decimal without binary float noise"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value) -> Decimal:
    """Round a monetary amount to cents, half-up"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def success_response(data=None, message="Success", status_code=status.HTTP_200_OK):
    """
    Standard success response format
    """
    response_data = {
        "code": status_code,
        "msg": message,
        "data": data
    }
    return Response(response_data, status=status_code)


def error_response(message="Error", errors=None, status_code=status.HTTP_400_BAD_REQUEST):
    """
    Standard error response format
    """
    response_data = {
        "code": status_code,
        "msg": message
    }
    if errors:
        response_data["errors"] = errors
    return Response(response_data, status=status_code)
