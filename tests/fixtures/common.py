"""Common mock API responses: errors and locations."""

BASE_URL = "https://integration.visma.net/API/controller/api/v1/"

ERROR_MESSAGE_BODY = '{"message": "VismaId: 5b7e2f. Error creating customer. Name is required."}'

ERROR_IPP_BODY = (
    '{"ExceptionType": "IPPException", '
    '"ExceptionMessage": "Customer 99999 not found", '
    '"ExceptionFaultCode": "12004", '
    '"ExceptionMessageID": "12004_5f1c"}'
)

ERROR_UNAUTHORIZED_BODY = '{"message": "Authorization has been denied for this request."}'

ERROR_PLAIN_BODY = "Service Unavailable"
