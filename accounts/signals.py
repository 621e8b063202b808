import logging
from django.dispatch import receiver
from allauth.account.signals import user_logged_in
from django.db.models.signals import post_migrate
from django.conf import settings
from allauth.account.models import EmailAddress
from urllib.parse import urlparse
from django.contrib.sites.models import Site

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def on_user_logged_in(sender, request, user, **kwargs):
    logger.info("User %s signed in", user.pk)
    site = getattr(settings, "SITE_URL", "")
    if site.startswith("http://localhost:8000"):
        EmailAddress.objects.update_or_create(
            user=user,
            email=user.email,
            defaults={"verified": True, "primary": True},
        )
        EmailAddress.objects.filter(user=user).exclude(
            email=user.email
        ).update(primary=False)


@receiver(post_migrate)
def sync_site_domain(sender, **kwargs):
    site_url = getattr(settings, "SITE_URL", "")
    if not site_url or sender.name != "accounts":
        return
    parsed = urlparse(site_url)
    host = parsed.hostname or "example.com"
    sid = getattr(settings, "SITE_ID", 1)
    Site.objects.update_or_create(
        id=sid, defaults={"domain": host, "name": host}
    )
