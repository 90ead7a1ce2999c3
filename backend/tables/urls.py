from django.urls import path

from .views import TableDetailView, TableListView, TableStatusView

app_name = "tables"

urlpatterns = [
    path("", TableListView.as_view(), name="table-list"),
    path("<int:number>/", TableDetailView.as_view(), name="table-detail"),
    path("<int:number>/status/", TableStatusView.as_view(), name="table-status"),
]
