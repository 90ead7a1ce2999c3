import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from users.permissions import CanChangeTableStatus, IsAdminRole, IsTenantStaff

from .exceptions import TableNotFoundError
from .serializers import TableSerializer, TableStatusSerializer
from .services import TableService

logger = logging.getLogger(__name__)


class TableListView(APIView):
    """GET the floor plan (optionally ?status=), POST a new table (admin)."""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsTenantStaff(), IsAdminRole()]
        return [IsTenantStaff()]

    def get(self, request):
        tables = TableService.list_tables(
            request.tenant, status=request.query_params.get("status")
        )
        return Response(TableSerializer(tables, many=True).data)

    def post(self, request):
        serializer = TableSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)

        try:
            table = TableService.create_table(request.tenant, **serializer.validated_data)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TableSerializer(table).data, status=status.HTTP_201_CREATED)


class TableDetailView(APIView):
    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsTenantStaff(), IsAdminRole()]
        return [IsTenantStaff()]

    def get(self, request, number):
        try:
            table = TableService.get_table(request.tenant, number)
        except TableNotFoundError as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(TableSerializer(table).data)

    def delete(self, request, number):
        try:
            TableService.delete_table(request.tenant, number)
        except TableNotFoundError as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True, "message": "Table deleted"})


class TableStatusView(APIView):
    permission_classes = [IsTenantStaff, CanChangeTableStatus]

    def put(self, request, number):
        serializer = TableStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Invalid status. Must be one of: available, occupied, reserved"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            table = TableService.set_status(
                request.tenant, number, serializer.validated_data["status"]
            )
        except TableNotFoundError as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(TableSerializer(table).data)

    patch = put
