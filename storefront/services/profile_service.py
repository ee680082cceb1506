from storefront.data.store import Store
from storefront.domain.errors import DataUnavailable
from storefront.domain.schemas import CheckoutForm, CurrentUser, Profile
from storefront.repos.profile_repo import ProfileRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_COUNTRY = "United States"


class ProfileService:
    def __init__(self, store: Store):
        self.repo = ProfileRepo(store)

    def get(self, user_id: str) -> Profile | None:
        row = self.repo.get_profile(user_id)
        return Profile.model_validate(row) if row else None

    def checkout_defaults(self, user: CurrentUser) -> CheckoutForm:
        """Checkout form pre-filled from the saved profile."""
        try:
            profile = self.get(user.id)
        except DataUnavailable as e:
            # pre-fill is a convenience, the form still works empty
            logger.warning(f"Could not load profile of user {user.id}: {e}")
            profile = None

        if profile is None:
            return CheckoutForm(email=user.email or "")

        return CheckoutForm(
            first_name=profile.first_name or "",
            last_name=profile.last_name or "",
            email=user.email or "",
            phone=profile.phone or "",
            address=profile.address or "",
            city=profile.city or "",
            state=profile.state or "",
            zip_code=profile.postal_code or "",
            country=profile.country or DEFAULT_COUNTRY,
        )

    def save_shipping_details(self, user_id: str, form: CheckoutForm) -> Profile:
        """Upsert the contact and address fields entered at checkout."""
        row = self.repo.upsert_profile(
            user_id,
            {
                "first_name": form.first_name.strip(),
                "last_name": form.last_name.strip(),
                "phone": form.phone.strip(),
                "address": form.address.strip(),
                "city": form.city.strip(),
                "state": form.state.strip(),
                "postal_code": form.zip_code.strip(),
                "country": form.country.strip(),
            },
        )
        logger.info(f"Saved shipping details of user {user_id}")
        return Profile.model_validate(row)
