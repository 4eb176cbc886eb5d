from polympc.dynamics.vehicle_model import VehicleModel

__all__ = ["VehicleModel"]
