"""Per-site adapter implementations."""

from .realtor_ca import RealtorCAAdapter
from .realtor_com import RealtorComAdapter
from .zillow import ZillowAdapter
from .trulia import TruliaAdapter

__all__ = ['RealtorCAAdapter', 'RealtorComAdapter', 'ZillowAdapter', 'TruliaAdapter']
