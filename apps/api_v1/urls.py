"""
apps.api_v1.urls
~~~~~~~~~~~~~~~~
URL routing for the configuration API.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import InterfaceView, VirtualIPView

urlpatterns = [
    # GET /api/v1/firewall/virtual_ip/
    path(
        "firewall/virtual_ip/",
        VirtualIPView.as_view(),
        name="firewall-virtual-ip",
    ),
    # GET /api/v1/interface/
    path(
        "interface/",
        InterfaceView.as_view(),
        name="interface",
    ),
]
