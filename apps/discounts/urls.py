from django.urls import path
from . import views

app_name = 'discounts'

urlpatterns = [
    # Cart-facing
    path('validate/', views.validate_discount_code, name='validate'),

    # Operator endpoints
    path('codes/', views.discount_codes, name='codes'),
    path('codes/<int:pk>/', views.discount_code_detail, name='code_detail'),
    path('codes/<int:pk>/redemptions/', views.discount_code_redemptions, name='code_redemptions'),
]
