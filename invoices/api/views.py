from typing import Any, Dict

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, inline_serializer
from rest_framework import serializers
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.views import APIView

from invoices import actions

from .response import APIResponse

INVOICE_ID_PARAM = OpenApiParameter(
    name="invoice_id",
    description="Invoice ID",
    required=True,
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
)

CUSTOMER_ID_PARAM = OpenApiParameter(
    name="customer_id",
    description="Customer ID",
    required=True,
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
)

InvoiceRequest = inline_serializer(
    name="InvoiceRequest",
    fields={
        "customerId": serializers.CharField(),
        "amount": serializers.DecimalField(max_digits=12, decimal_places=2),
        "status": serializers.ChoiceField(choices=["pending", "paid"]),
    },
)

CustomerRequest = inline_serializer(
    name="CustomerRequest",
    fields={
        "name": serializers.CharField(),
        "email": serializers.EmailField(),
        "image_url": serializers.ImageField(),
    },
)

Envelope = inline_serializer(
    name="Envelope",
    fields={
        "success": serializers.BooleanField(),
        "message": serializers.CharField(),
        "data": serializers.DictField(required=False),
    },
)


def submission_from(request: Request) -> Dict[str, Any]:
    """Flatten request data (and multipart files) into a field map."""
    data = request.data
    if hasattr(data, "dict"):
        return data.dict()
    return dict(data)


class InvoiceCreateView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        summary="Create invoice",
        description="Validate and store a new invoice dated today. Amount is in major units.",
        request=InvoiceRequest,
        responses={201: Envelope, 400: Envelope, 500: Envelope},
    )
    def post(self, request: Request):
        result = actions.create_invoice(None, submission_from(request))
        return APIResponse.from_result(result, success_status=201)


class InvoiceDetailView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        summary="Update invoice",
        description="Replace customer, amount and status of an existing invoice.",
        parameters=[INVOICE_ID_PARAM],
        request=InvoiceRequest,
        responses={200: Envelope, 400: Envelope, 404: Envelope, 500: Envelope},
    )
    def put(self, request: Request, invoice_id: str):
        result = actions.update_invoice(invoice_id, None, submission_from(request))
        return APIResponse.from_result(result)

    @extend_schema(
        summary="Delete invoice",
        parameters=[INVOICE_ID_PARAM],
        request=None,
        responses={200: Envelope, 404: Envelope, 500: Envelope},
    )
    def delete(self, request: Request, invoice_id: str):
        return APIResponse.from_result(actions.delete_invoice(invoice_id))


class CustomerCreateView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        summary="Create customer",
        description="Store the profile image, then the customer row referencing it.",
        request={"multipart/form-data": CustomerRequest},
        responses={201: Envelope, 400: Envelope, 500: Envelope},
    )
    def post(self, request: Request):
        result = actions.create_customer(None, submission_from(request))
        return APIResponse.from_result(result, success_status=201)


class CustomerDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Delete customer",
        parameters=[CUSTOMER_ID_PARAM],
        request=None,
        responses={200: Envelope, 404: Envelope, 500: Envelope},
    )
    def delete(self, request: Request, customer_id: str):
        return APIResponse.from_result(actions.delete_customer(customer_id))
