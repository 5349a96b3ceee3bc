from django.urls import path
from . import views

app_name = 'crm'

urlpatterns = [
    path('movements/', views.movements, name='movements'),
    path('movements/<int:pk>/', views.movement_detail, name='movement_detail'),
    path('movements/<int:pk>/payments/', views.record_payment, name='record_payment'),
    path('movements/<int:pk>/status/', views.update_movement_status, name='movement_status'),
    path('debts/', views.debts, name='debts'),
    path('stats/', views.debt_stats, name='stats'),
]
