"""
CONTACT MESSAGES

- POST  /api/contact/                -> public contact form (throttled)
- GET   /api/contact/?status=new     -> dashboard inbox (messages.manage)
- PATCH /api/contact/<id>/status/    -> mark read / replied
"""

from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from contact.models import ContactMessage
from contact.serializers import (
    ContactMessageCreateSerializer,
    ContactMessageSerializer,
    ContactStatusSerializer,
)
from permissions.roles import CAP_MESSAGES_MANAGE, HasCapability
from users.authentication import OptionalJWTAuthentication

logger = logging.getLogger(__name__)


class ContactThrottle(AnonRateThrottle):
    scope = "public_write"


@extend_schema_view(
    list=extend_schema(tags=["Contact admin"]),
    create=extend_schema(tags=["Contact"], request=ContactMessageCreateSerializer, responses={201: dict}),
)
class ContactMessageViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    queryset = ContactMessage.objects.all().order_by("-created_at")
    serializer_class = ContactMessageSerializer
    authentication_classes = [OptionalJWTAuthentication]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["status"]
    required_capability = CAP_MESSAGES_MANAGE

    def get_permissions(self):
        if self.action == "create":
            return [AllowAny()]
        return [IsAuthenticated(), HasCapability()]

    def get_throttles(self):
        if self.action == "create":
            return [ContactThrottle()]
        return super().get_throttles()

    def create(self, request, *args, **kwargs):
        serializer = ContactMessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        msg = serializer.save()

        logger.info("Contact message received", extra={"message_id": msg.pk})

        return Response(
            {"success": True, "id": msg.pk, "message": "Message envoyé avec succès!"},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["Contact admin"], request=ContactStatusSerializer, responses={200: ContactMessageSerializer})
    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):
        msg = self.get_object()

        serializer = ContactStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        msg.status = serializer.validated_data["status"]
        msg.save(update_fields=["status", "updated_at"])

        return Response(ContactMessageSerializer(msg).data)
