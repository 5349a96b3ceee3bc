from django.urls import path
from . import views

app_name = 'orders'

urlpatterns = [
    path('<str:order_number>/paid/', views.mark_order_paid, name='mark-paid'),
]
