from django.contrib import admin
from .models import Team, Member, RateLimitRecord


class MemberInline(admin.TabularInline):
    model = Member
    extra = 0
    fields = ('position', 'name', 'email', 'phone', 'roll_no', 'year', 'is_leader')
    readonly_fields = ('position', 'is_leader')


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('registration_id', 'team_name', 'department', 'status', 'leader_email', 'created_at')
    list_filter = ('status', 'department', 'created_at')
    search_fields = ('team_name', 'registration_id', 'leader_email', 'members__email')
    readonly_fields = ('registration_id', 'created_at', 'updated_at')
    date_hierarchy = 'created_at'
    inlines = [MemberInline]


@admin.register(RateLimitRecord)
class RateLimitRecordAdmin(admin.ModelAdmin):
    list_display = ('ip', 'endpoint', 'count', 'window_start')
    search_fields = ('ip', 'endpoint')
