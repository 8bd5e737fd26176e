"""
Title: ECAM Static Tables (Thresholds, Fault Catalogue, Sensor Channels)
Author: Alex Cooke
Date Created: 2026-10-12
Last Modified: 2026-10-18
Version: 1.3

Purpose:
Declares the process-wide constant tables consumed by the ECAM
systems-monitoring simulator (ECAMS): the threshold definition for every
monitored parameter, the ECAM fault-code catalogue, the simulated sensor
channels (initial value, jitter range, physical bounds and the threshold each
channel is classified against) and the sensor effects of each fault. Tables are validated by validate_tables() at
startup.

Targeted Requirements:
- ECAMS-CR002: Threshold bounds strictly increasing.
- ECAMS-CR003: Unique fault codes.

Scope and Limitations:
- Values represent an A320-family aircraft with CFM56-5B engines at cruise.
- Hydraulic pressure and fuel quantity are low-side dual-bound parameters:
  depletion is the hazard, excess is not monitored.

Safety Notice:
This software is for academic and illustrative purposes only.
It is not flight-certified and must not be used in operational systems.
"""

from alarm_levels import AlarmLevel
from ecam_configuration import (
    FaultDefinition,
    Threshold,
    validate_fault_catalog,
    validate_thresholds,
)
from sims.fault_injector import FaultEffect, validate_fault_effects
from sims.sensor_simulator import SensorChannel, validate_channels


THRESHOLDS: dict[str, Threshold] = {
    # Engines
    "n1": Threshold(name="N1 - Fan Speed", unit="%", caution=95, warning=101, max_value=104),
    "egt": Threshold(name="Exhaust Gas Temperature", unit="°C", caution=750, warning=900, max_value=950),
    "n2": Threshold(name="N2 - Core Speed", unit="%", caution=97, warning=102, max_value=105),
    "ff": Threshold(name="Fuel Flow", unit="kg/h", max_value=3000),
    "oilPress": Threshold(
        name="Oil Pressure", unit="PSI",
        warning_lo=20, caution_lo=30, caution_hi=85, warning_hi=95, max_value=100,
    ),
    "vibN1": Threshold(name="N1 Vibration", unit="mils", caution=3.0, warning=4.5, max_value=6.0),

    # Hydraulics
    "hydraulicPress": Threshold(
        name="Hydraulic Pressure", unit="PSI",
        warning_lo=1500, caution_lo=2500, nominal=3000,
    ),
    "hydraulicTemp": Threshold(name="Hydraulic Temperature", unit="°C", caution=85, warning=100, max_value=120),

    # Electrical
    "acBusVoltage": Threshold(
        name="AC Bus Voltage", unit="V",
        warning_lo=95, caution_lo=105, nominal=115, caution_hi=125, warning_hi=130,
    ),
    "dcBusVoltage": Threshold(
        name="DC Bus Voltage", unit="V",
        warning_lo=22, caution_lo=25, nominal=28, caution_hi=30, warning_hi=32,
    ),
    "generatorLoad": Threshold(name="Generator Load", unit="%", caution=80, warning=95, max_value=100),
    "batteryTemp": Threshold(name="Battery Temperature", unit="°C", caution=45, warning=55, max_value=70),

    # Pressurisation
    "cabinAltitude": Threshold(name="Cabin Altitude", unit="ft", caution=8000, warning=10000, max_value=14000),
    "deltaP": Threshold(name="Cabin Delta P", unit="PSI", caution=8.5, warning=9.0, max_value=9.5),

    # Fuel
    "fuelQuantity": Threshold(
        name="Fuel Quantity", unit="kg",
        warning_lo=1500, caution_lo=2500,
    ),
}


def _fault(code: str, message: str, system: str, level: AlarmLevel) -> FaultDefinition:
    return FaultDefinition(code=code, message=message, system=system, level=level)


FAULT_CATALOG: tuple[FaultDefinition, ...] = (
    _fault("ENG-N1-HI", "ENGINE 1 N1 ABOVE LIMIT", "engines", AlarmLevel.WARNING),
    _fault("ENG-EGT-HI", "ENGINE EGT EXCEEDANCE", "engines", AlarmLevel.WARNING),
    _fault("ENG-OIL-LO", "ENGINE OIL PRESSURE LOW", "engines", AlarmLevel.CAUTION),
    _fault("ENG-VIB-HI", "ENGINE VIBRATION HIGH", "engines", AlarmLevel.CAUTION),
    _fault("HYD-GRN-LO", "GREEN HYDRAULIC PRESSURE LOW", "hydraulics", AlarmLevel.WARNING),
    _fault("HYD-BLU-LO", "BLUE HYDRAULIC PRESSURE LOW", "hydraulics", AlarmLevel.CAUTION),
    _fault("HYD-YEL-LO", "YELLOW HYDRAULIC PRESSURE LOW", "hydraulics", AlarmLevel.CAUTION),
    _fault("ELEC-GEN-HI", "AC GENERATOR OVERLOAD", "electrical", AlarmLevel.CAUTION),
    _fault("ELEC-BAT-HI", "BATTERY TEMPERATURE HIGH", "electrical", AlarmLevel.WARNING),
    _fault("ELEC-BUS-LO", "AC BUS VOLTAGE LOW", "electrical", AlarmLevel.WARNING),
    _fault("PRESS-CAB-HI", "CABIN ALTITUDE HIGH", "pressurization", AlarmLevel.WARNING),
    _fault("PRESS-DP-HI", "CABIN DIFFERENTIAL PRESSURE HIGH", "pressurization", AlarmLevel.CAUTION),
    _fault("FCTL-ELAC-1", "ELAC 1 FAULT", "flight-controls", AlarmLevel.WARNING),
    _fault("FCTL-SEC-2", "SEC 2 FAULT", "flight-controls", AlarmLevel.CAUTION),
    _fault("FUEL-QTY-LO", "FUEL QUANTITY LOW", "fuel", AlarmLevel.CAUTION),
    _fault("FUEL-TEMP-HI", "FUEL TEMPERATURE HIGH", "fuel", AlarmLevel.CAUTION),
    _fault("APU-EGT-HI", "APU EGT HIGH", "apu", AlarmLevel.WARNING),
)


def _engine_channels(eng: str, n1: float, egt: float, n2: float, ff: float, oil: float, vib: float):
    return [
        SensorChannel(f"{eng}.n1", "engines", n1, 0.3, 60, 104, "n1"),
        SensorChannel(f"{eng}.egt", "engines", egt, 5, 350, 950, "egt"),
        SensorChannel(f"{eng}.n2", "engines", n2, 0.2, 65, 105, "n2"),
        SensorChannel(f"{eng}.ff", "engines", ff, 15, 800, 3000, "ff"),
        SensorChannel(f"{eng}.oilPress", "engines", oil, 1, 10, 95, "oilPress"),
        SensorChannel(f"{eng}.vibN1", "engines", vib, 0.15, 0.3, 5.5, "vibN1"),
    ]


SENSOR_CHANNELS: tuple[SensorChannel, ...] = (
    *_engine_channels("eng1", 85.2, 580, 88.1, 1240, 62, 1.2),
    *_engine_channels("eng2", 84.8, 575, 87.6, 1235, 64, 1.1),

    SensorChannel("hydraulics.greenPress", "hydraulics", 3000, 20, 500, 3500, "hydraulicPress"),
    SensorChannel("hydraulics.bluePress", "hydraulics", 3000, 20, 500, 3500, "hydraulicPress"),
    SensorChannel("hydraulics.yellowPress", "hydraulics", 3000, 20, 500, 3500, "hydraulicPress"),
    SensorChannel("hydraulics.greenQty", "hydraulics", 98, 0.3, 70, 100),
    SensorChannel("hydraulics.blueQty", "hydraulics", 97, 0.3, 70, 100),
    SensorChannel("hydraulics.yellowQty", "hydraulics", 99, 0.3, 70, 100),
    SensorChannel("hydraulics.greenTemp", "hydraulics", 45, 0.5, 20, 100, "hydraulicTemp"),
    SensorChannel("hydraulics.blueTemp", "hydraulics", 43, 0.5, 20, 100, "hydraulicTemp"),
    SensorChannel("hydraulics.yellowTemp", "hydraulics", 46, 0.5, 20, 100, "hydraulicTemp"),

    SensorChannel("electrical.acBus1V", "electrical", 115, 0.3, 90, 125, "acBusVoltage"),
    SensorChannel("electrical.acBus2V", "electrical", 115, 0.3, 90, 125, "acBusVoltage"),
    SensorChannel("electrical.dcBus1V", "electrical", 28, 0.1, 20, 30, "dcBusVoltage"),
    SensorChannel("electrical.dcBus2V", "electrical", 28, 0.1, 20, 30, "dcBusVoltage"),
    SensorChannel("electrical.gen1Load", "electrical", 42, 1, 10, 95, "generatorLoad"),
    SensorChannel("electrical.gen2Load", "electrical", 45, 1, 10, 95, "generatorLoad"),
    SensorChannel("electrical.batV", "electrical", 28.5, 0.05, 24, 30),
    SensorChannel("electrical.batTemp", "electrical", 22, 0.3, 15, 55, "batteryTemp"),

    SensorChannel("pressurization.cabinAlt", "pressurization", 6200, 30, 0, 12000, "cabinAltitude"),
    SensorChannel("pressurization.deltaP", "pressurization", 7.8, 0.05, 0, 9.2, "deltaP"),
    SensorChannel("pressurization.cabinRate", "pressurization", -300, 20, -600, 800),
    SensorChannel("pressurization.outflowValve", "pressurization", 42, 1, 0, 100),
    SensorChannel("pressurization.packFlow1", "pressurization", 100, 1, 80, 100),
    SensorChannel("pressurization.packFlow2", "pressurization", 100, 1, 80, 100),

    SensorChannel("flight-controls.aileronL", "flight-controls", 0, 0.5, -20, 20),
    SensorChannel("flight-controls.elevatorL", "flight-controls", 0, 0.3, -25, 25),
    SensorChannel("flight-controls.rudder", "flight-controls", 0, 0.2, -25, 25),

    SensorChannel("fuel.totalFuel", "fuel", 10280, 5, 0, 18000, "fuelQuantity"),
    SensorChannel("fuel.fuelFlow", "fuel", 2475, 10, 2000, 3500),
    SensorChannel("fuel.fuelTemp", "fuel", -18, 0.2, -40, 30),
)


FAULT_EFFECTS: dict[str, tuple[FaultEffect, ...]] = {
    "ENG-N1-HI": (FaultEffect("eng1.n1", delta=17),),
    "ENG-EGT-HI": (FaultEffect("eng1.egt", delta=330),),
    "ENG-OIL-LO": (
        FaultEffect("eng1.oilPress", delta=-35),
        FaultEffect("eng1.vibN1", delta=1.5),
    ),
    "ENG-VIB-HI": (FaultEffect("eng1.vibN1", delta=2.5),),
    "HYD-GRN-LO": (
        FaultEffect("hydraulics.greenPress", delta=-1600),
        FaultEffect("hydraulics.greenQty", delta=-25),
        FaultEffect("hydraulics.greenTemp", delta=15),
    ),
    "HYD-BLU-LO": (FaultEffect("hydraulics.bluePress", delta=-800),),
    "HYD-YEL-LO": (FaultEffect("hydraulics.yellowPress", delta=-800),),
    "ELEC-GEN-HI": (FaultEffect("electrical.gen1Load", delta=40),),
    "ELEC-BAT-HI": (FaultEffect("electrical.batTemp", delta=35),),
    "ELEC-BUS-LO": (FaultEffect("electrical.acBus1V", factor=0.7),),
    "PRESS-CAB-HI": (
        FaultEffect("pressurization.cabinAlt", delta=4000),
        FaultEffect("pressurization.deltaP", delta=-4),
    ),
    "PRESS-DP-HI": (FaultEffect("pressurization.deltaP", delta=0.9),),
    "FUEL-QTY-LO": (FaultEffect("fuel.totalFuel", delta=-8000),),
    "FUEL-TEMP-HI": (FaultEffect("fuel.fuelTemp", delta=45),),
    # FCTL-* and APU-EGT-HI have no simulated channel to degrade
}


def validate_tables(thresholds=None, catalog=None, channels=None, effects=None) -> None:
    # Startup gate: refuse to run with malformed static tables.
    thresholds = THRESHOLDS if thresholds is None else thresholds
    catalog = FAULT_CATALOG if catalog is None else catalog
    channels = SENSOR_CHANNELS if channels is None else channels
    effects = FAULT_EFFECTS if effects is None else effects

    validate_thresholds(thresholds)
    validate_fault_catalog(catalog)
    validate_channels(channels, thresholds)
    validate_fault_effects(effects, catalog, channels)
