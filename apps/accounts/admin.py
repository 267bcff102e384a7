from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole


ROLE_COLORS = {
    UserRole.PASSENGER: '#6B8E5E',
    UserRole.CONDUCTOR: '#2E6DB4',
    UserRole.INSPECTOR: '#A47449',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for wallet users.

    Staff assign conductor and inspector roles from here.
    """

    list_display = [
        'username',
        'email',
        'full_name',
        'phone_number',
        'role_badge',
        'is_active',
        'created_at',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'username',
        'email',
        'first_name',
        'last_name',
        'phone_number',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'username', 'password')
        }),
        ('Profile', {
            'fields': ('first_name', 'last_name', 'phone_number', 'avatar', 'role'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'username', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    @admin.display(description='Name')
    def full_name(self, obj):
        return obj.get_full_name()

    @admin.display(description='Role', ordering='role')
    def role_badge(self, obj):
        """Display role as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLORS.get(obj.role, '#999'),
            obj.get_role_display(),
        )

    actions = [
        'make_passengers',
        'make_conductors',
        'make_inspectors',
        'deactivate_users',
    ]

    @admin.action(description='Set role: passenger')
    def make_passengers(self, request, queryset):
        count = queryset.update(role=UserRole.PASSENGER)
        self.message_user(request, f'Updated {count} user(s) to passenger.')

    @admin.action(description='Set role: conductor')
    def make_conductors(self, request, queryset):
        count = queryset.update(role=UserRole.CONDUCTOR)
        self.message_user(request, f'Updated {count} user(s) to conductor.')

    @admin.action(description='Set role: inspector')
    def make_inspectors(self, request, queryset):
        count = queryset.update(role=UserRole.INSPECTOR)
        self.message_user(request, f'Updated {count} user(s) to inspector.')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (excludes superusers)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)
