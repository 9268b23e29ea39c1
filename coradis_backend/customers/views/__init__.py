from .auth import CustomerCheckAuthView, CustomerLoginView, CustomerLogoutView, CustomerRegisterView
from .loyalty import AvailableDiscountView, ScratchCardListView, ScratchCardScratchView
from .orders import FavoriteOrderDetailView, FavoriteOrderListView, MyOrdersView
from .profile import CustomerProfileView, UseReferralCodeView

__all__ = [
    "AvailableDiscountView",
    "CustomerCheckAuthView",
    "CustomerLoginView",
    "CustomerLogoutView",
    "CustomerProfileView",
    "CustomerRegisterView",
    "FavoriteOrderDetailView",
    "FavoriteOrderListView",
    "MyOrdersView",
    "ScratchCardListView",
    "ScratchCardScratchView",
    "UseReferralCodeView",
]
