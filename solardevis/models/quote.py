from typing import Optional, List
from pydantic import BaseModel, Field


class LineItem(BaseModel):
    """One appliance entry from a site audit (or added by hand in the editor)."""
    id: str
    client: str = ""
    site: str = ""
    address: str = ""
    date: str = ""
    agent: str = ""
    device: str = ""
    hourly_kwh: float = Field(0.0, description="Hourly energy draw in kWh/h")
    peak_w: float = Field(0.0, description="Peak power draw in W")
    duration_h: float = Field(0.0, description="Daily usage in hours/day")
    quantity: int = Field(0, ge=0)
    unit_price: float = Field(0.0, description="Purchase price per unit, before margin")
    include_in_sizing: bool = Field(True, description="Counted in peak-power sizing when sizing_only is requested")


class ProfileTotals(BaseModel):
    total_daily_kwh: float = 0.0
    total_max_w: float = 0.0


class ClientProfile(BaseModel):
    name: str
    address: str
    site_name: str = ""
    visit_date: str = ""
    items: List[LineItem] = []
    total_daily_kwh: float = 0.0
    total_max_w: float = 0.0


class QuoteConfig(BaseModel):
    margin_percent: float = Field(20.0, ge=0)
    discount_percent: float = Field(0.0, ge=0)
    material_tax_percent: float = Field(20.0, ge=0)
    install_cost: float = Field(1500.0, ge=0)
    install_tax_percent: float = Field(10.0, ge=0)

    # extended sizing variant
    panel_wattage: float = Field(425.0, gt=0)
    system_efficiency_percent: float = Field(100.0, gt=0)
    peak_sun_hours: Optional[float] = Field(None, gt=0, description="Overrides the default sizing divisor")


class SizingResult(BaseModel):
    needed_kwp: float
    panel_count: int
    divisor: float
    panel_wattage: float


class QuoteBreakdown(BaseModel):
    material_subtotal: float
    discount_amount: float
    material_after_discount: float
    material_tax: float
    install_cost: float
    install_tax: float
    grand_total: float


class QuoteLine(BaseModel):
    designation: str
    peak_w: Optional[float] = None
    quantity: int
    unit_price: float
    total: float
    unit_price_display: str
    total_display: str


class QuoteDocument(BaseModel):
    number: str
    issued_on: str
    client_name: str
    client_address: str
    site_name: str
    sizing: SizingResult
    total_daily_kwh: float
    total_max_w: float
    lines: List[QuoteLine] = []
    # material lines are rounded one by one; the subtotal is the rounded sum
    lines_total: float = 0.0
    rounding_adjustment: float = 0.0
    breakdown: QuoteBreakdown
    show_discount: bool = False
    discount_percent: float = 0.0
    material_tax_percent: float = 0.0
    install_tax_percent: float = 0.0
    amounts_display: dict = {}


class AnalysisResult(BaseModel):
    text: str
    fallback: bool = False
    model: Optional[str] = None
