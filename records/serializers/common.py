"""
Shared serializer building blocks.

Models use snake_case field names while the clinic front-end speaks
camelCase; ``CamelModelSerializer`` translates keys in both directions
so individual serializers only need to list their model fields.
"""
import bleach
from rest_framework import serializers

from records.services.scoping import MAX_PAGE_SIZE


def to_camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def clean_text(value):
    return bleach.clean((value or '').strip(), strip=True)


class UserRefField(serializers.Field):
    """Read-only ``{id, name}`` reference to a staff user."""

    def __init__(self, **kwargs):
        kwargs['read_only'] = True
        super().__init__(**kwargs)

    def to_representation(self, user):
        return {'id': user.id, 'name': user.get_full_name() or user.username}


class CamelModelSerializer(serializers.ModelSerializer):
    # field name -> API key, where plain camelCase is not what clients send
    field_aliases: dict[str, str] = {}

    def api_key(self, field_name: str) -> str:
        return self.field_aliases.get(field_name) or to_camel(field_name)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {self.api_key(k): v for k, v in data.items()}

    def to_internal_value(self, data):
        lookup = {self.api_key(name): name for name in self.fields}
        converted = {lookup.get(key, key): value for key, value in data.items()}
        try:
            return super().to_internal_value(converted)
        except serializers.ValidationError as exc:
            if isinstance(exc.detail, dict):
                raise serializers.ValidationError({self.api_key(k): v for k, v in exc.detail.items()})
            raise


class PageQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1, default=50)

    def validate_limit(self, v):
        return min(v, MAX_PAGE_SIZE)


class DateRangeQuerySerializer(PageQuerySerializer):
    locationId = serializers.CharField(required=False, allow_blank=True)
    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)
