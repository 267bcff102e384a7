from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'fares'

router = DefaultRouter()
router.register(r'discounts', views.DiscountViewSet, basename='discount')

urlpatterns = [
    # Discount configuration
    # GET    /api/fares/discounts/        - List discounts (?active=true)
    # POST   /api/fares/discounts/        - Create discount
    # PATCH  /api/fares/discounts/{id}/   - Update discount
    # DELETE /api/fares/discounts/{id}/   - Delete discount

    path('quote/', views.fare_quote, name='quote'),
    path('distance/', views.distance, name='distance'),
    path('places/', views.places, name='places'),

    path('', include(router.urls)),
]
