from django.urls import path
from . import views

app_name = 'points'

urlpatterns = [
    # User-facing endpoints
    path('balance/', views.get_points_balance, name='balance'),
    path('summary/', views.get_points_summary, name='summary'),
    path('transactions/', views.get_points_transactions, name='transactions'),
    path('redeem/', views.redeem_points, name='redeem'),

    # Internal endpoints (order processing, operators)
    path('internal/award/', views.internal_award_points, name='internal_award'),
    path('internal/adjust/', views.internal_adjust_points, name='internal_adjust'),
]
