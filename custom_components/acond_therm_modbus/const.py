"""Constants for the AcondTherm Modbus integration."""
from datetime import timedelta

DOMAIN = "acond_therm_modbus"
CONF_HOST = "host"
CONF_NAME = "name"
CONF_SENSOR_NAME = "sensor_name"
CONF_SLAVE_ID = "slave_id"
CONF_POLLING_INTERVAL = "polling_interval"
CONF_MIN_HEATING_TEMP = "min_heating_temperature"
CONF_MAX_HEATING_TEMP = "max_heating_temperature"
CONF_MIN_TUV_TEMP = "min_tuv_temperature"
CONF_MAX_TUV_TEMP = "max_tuv_temperature"

# Modbus/TCP parameters
MODBUS_TCP_PORT = 502
MODBUS_TIMEOUT = 5.0
DEFAULT_SLAVE_ID = 1

DEFAULT_NAME = "AcondTherm"
DEFAULT_SENSOR_NAME = "Outdoor air"
DEFAULT_SCAN_INTERVAL = timedelta(seconds=20)

# Setpoint bounds in °C, used when the entry does not override them
DEFAULT_MIN_HEATING_TEMP = 10.0
DEFAULT_MAX_HEATING_TEMP = 30.0
DEFAULT_MIN_TUV_TEMP = 10.0
DEFAULT_MAX_TUV_TEMP = 55.0

MANUFACTURER = "AcondTherm"
MODEL = "Pro-N"

PLATFORMS = ["climate", "sensor", "binary_sensor"]
