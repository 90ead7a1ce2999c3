from django_filters import rest_framework as filters

from .models import Product


class ProductFilter(filters.FilterSet):
    category = filters.ChoiceFilter(choices=Product.Category.choices)
    available = filters.BooleanFilter()

    class Meta:
        model = Product
        fields = ["category", "available"]
