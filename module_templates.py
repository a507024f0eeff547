"""Content for the placeholder feature pages, rendered by module_page.render_module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ModuleSection:
    title: str
    what_it_does: str = ""
    prerequisites: tuple[str, ...] = ()
    process: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModuleTemplate:
    name: str
    description: str = ""
    what_it_does: str = ""
    prerequisites: tuple[str, ...] = ()
    process_steps: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()
    expected_features: tuple[str, ...] = ()
    sections: tuple[ModuleSection, ...] = ()
    status_label: str = "Coming Soon"
    status_color: str = "warning"


@dataclass(frozen=True)
class ModelingModule:
    slug: str
    template: ModuleTemplate = field(repr=False)

    @property
    def name(self) -> str:
        return self.template.name


DATA_INVALIDATOR = ModuleTemplate(
    name="Data Invalidator",
    status_label="In Development",
    what_it_does="Quality control and validation gateway for incoming warehouse data.",
    prerequisites=(
        "CSV or Excel files containing warehouse data (order headers, order details, item master data)",
        "A project database to store validated data",
    ),
    process_steps=(
        "Upload source files to the system",
        "Map source file columns to standardized destination tables",
        "Run automated validation checks (data types, ranges, required fields, logical consistency)",
        "Review validation results and apply data transformations if needed",
        "Check data integrity across related tables (e.g., ensuring all order line items reference valid products)",
        "Load validated data into the project database",
    ),
    outputs=(
        "Clean, validated data loaded into standardized database tables",
        "Validation reports showing any issues found",
        "Error logs and statistics for data quality tracking",
    ),
)

DATA_SYNTHESIS = ModuleTemplate(
    name="Data Synthesis",
    what_it_does=(
        "Generates realistic synthetic warehouse data for testing and analysis "
        "when real data is unavailable or insufficient."
    ),
    prerequisites=(
        "Sample historical data (order patterns, product characteristics)",
        "Desired output volume and characteristics",
    ),
    process_steps=(
        "Analyze patterns in historical data (order sizes, product velocity, seasonality)",
        "Cluster similar orders and products into groups",
        "Learn statistical distributions from each cluster",
        "Generate synthetic orders, products, and order details matching real-world patterns",
        "Apply constraints and business rules to maintain realism",
        "Generate related data (customer information, dates, quantities)",
    ),
    outputs=(
        "Synthetic order headers, order details, and item master tables",
        "Data that statistically matches real-world patterns",
        "Scalable datasets for stress-testing systems",
    ),
)

CAPITAL_EXPENSES = ModuleTemplate(
    name="Capital Expenses",
    what_it_does="Estimates equipment and infrastructure costs for warehouse solutions.",
    prerequisites=(
        "Solution design and equipment specifications",
        "Equipment counts (robots, conveyors, workstations)",
        "Facility requirements",
    ),
    process_steps=(
        "Catalog all required equipment",
        "Apply unit costs to equipment quantities",
        "Calculate installation and integration costs",
        "Add facility infrastructure costs",
        "Sum total capital investment",
        "Generate cost breakdown by category",
    ),
    outputs=(
        "Total capital expense (CapEx) estimate",
        "Cost breakdown by equipment type",
        "Return on investment (ROI) analysis inputs",
        "Budget justification documentation",
    ),
)

LABOR_CALCULATOR = ModuleTemplate(
    name="Labor Calculator",
    what_it_does="Calculates labor requirements and costs for warehouse operations.",
    prerequisites=(
        "Throughput requirements (orders, lines, units per hour)",
        "Labor standards (picks per hour, packs per hour)",
        "Wage rates and shift structures",
    ),
    process_steps=(
        "Calculate required labor hours by activity",
        "Convert hours to full-time equivalents (FTEs)",
        "Apply shift patterns and coverage requirements",
        "Calculate total labor costs",
        "Compare baseline vs. automated scenarios",
        "Factor in peak vs. average demand",
    ),
    outputs=(
        "Required headcount by function",
        "Labor cost projections",
        "Cost savings from automation",
        "Staffing plans by shift",
    ),
)

LAYOUT_MANAGER = ModuleTemplate(
    name="Layout Manager",
    what_it_does="Imports, stores, and manages warehouse floor layouts for simulation and analysis.",
    prerequisites=(
        "CAD files or layout drawings (DXF/DWG format)",
        "Layout metadata (dimensions, equipment types, zones)",
    ),
    process_steps=(
        "Upload CAD layout files",
        "Parse layout to extract equipment locations, aisles, storage areas",
        "Store layout geometry and metadata in database",
        "Create searchable catalog of layouts by project",
        "Enable selection of layouts for simulation runs",
    ),
    outputs=(
        "Structured layout data ready for simulation",
        "Visual representations of warehouse layouts",
        "Reusable layout library for multiple projects",
    ),
)

MODELING_OVERVIEW = ModuleTemplate(
    name="Modeling",
    what_it_does="Core discrete-event simulation engine that runs warehouse operations scenarios.",
    prerequisites=(
        "Validated data (orders, products, inventory)",
        "Warehouse layout",
        "Equipment specifications and quantities",
        "Process configurations",
    ),
    process_steps=(
        "Initialize warehouse environment with layout and inventory",
        "Load orders to be fulfilled",
        "Simulate equipment movement, picking, packing operations over time",
        "Track resource utilization, bottlenecks, and throughput",
        "Apply operational rules and constraints",
        "Collect detailed performance metrics at each time step",
    ),
    outputs=(
        "Performance metrics (throughput, cycle times, resource utilization)",
        "Bottleneck identification",
        "Animation and visualization of operations",
        "Event logs and timing data",
    ),
)

MODELING_MODULES: tuple[ModelingModule, ...] = (
    ModelingModule("fast-pick-analysis", ModuleTemplate(
        name="FastPick Analysis",
        what_it_does="Optimizes which products should be placed in a high-speed picking zone.",
        prerequisites=(
            "Order history with dates, products, and quantities",
            "Number of SKU slots available in fast-pick area",
            "Reslotting frequency (how often to change which products are in fast-pick)",
        ),
        process_steps=(
            "Analyze order history to identify highest velocity products",
            "Calculate how many orders could be fulfilled from fast-pick zone",
            "Simulate different fast-pick sizes (100 SKUs, 500 SKUs, etc.)",
            "Test different reslotting frequencies (weekly, monthly, etc.)",
            "Calculate efficiency improvements and consolidation opportunities",
            "Identify which products to place in fast-pick for each period",
        ),
        outputs=(
            "Optimal fast-pick size and reslotting frequency",
            "Lists of which SKUs should be in fast-pick for each time period",
            "Projected improvement metrics (orders completed, labor savings)",
            "Summary charts and tables for decision-making",
        ),
    )),
    ModelingModule("affinity-analysis", ModuleTemplate(
        name="Affinity Analysis",
        what_it_does="Determines which products are frequently ordered together to optimize picking strategies.",
        prerequisites=(
            "Order detail history showing which SKUs appear on the same orders",
            "Order volume parameters",
        ),
        process_steps=(
            "Analyze co-occurrence of products across orders",
            "Build affinity matrices showing which products are ordered together",
            "Simulate pick-to-wall or batch picking strategies",
            "Calculate optimal batch sizes based on product affinity",
            "Determine best allocation of products to picking positions",
            "Evaluate consolidation opportunities",
        ),
        outputs=(
            "Product affinity scores and groupings",
            "Recommended batch sizes for picking",
            "Optimal SKU positioning recommendations",
            "Units-per-facing and efficiency metrics",
        ),
    )),
    ModelingModule("solution-selector", ModuleTemplate(
        name="Solution Selector",
        what_it_does="Compares different automation and operational strategies to recommend the best solution.",
        prerequisites=(
            "Operational requirements (orders/hour, throughput targets)",
            "Facility constraints (space, budget)",
            "Available technology options",
        ),
        process_steps=(
            "Input operational parameters and constraints",
            "Generate multiple solution alternatives (manual picking, automation types, hybrid approaches)",
            "Score each solution on multiple criteria",
            "Calculate costs, space requirements, and performance",
            "Rank solutions based on scoring methodology",
        ),
        outputs=(
            "Scored comparison of solution alternatives",
            "Recommendation with justification",
            "Trade-off analysis between cost, performance, and complexity",
        ),
    )),
    ModelingModule("storage-sizing", ModuleTemplate(
        name="Storage Sizing",
        what_it_does="Calculates required storage capacity and slot counts for inventory management.",
        prerequisites=(
            "Inventory data (SKU characteristics, velocities, quantities)",
            "Days-on-hand targets",
            "Container/slot specifications",
            "Storage policies and rules",
        ),
        process_steps=(
            "Analyze inventory profiles and movement patterns",
            "Calculate required slot counts by storage type",
            "Apply min/max inventory rules",
            "Account for replenishment frequency",
            "Simulate inventory levels over time",
            "Size storage areas for different product categories",
        ),
        outputs=(
            "Required slot counts by storage type",
            "Storage space requirements (square footage, cubic capacity)",
            "Inventory level projections",
            "Storage configuration recommendations",
        ),
    )),
    ModelingModule("pick-and-pass", ModuleTemplate(
        name="Pick and Pass",
        what_it_does="Models zone-based picking where orders pass through multiple picking zones.",
        prerequisites=(
            "Order data with line items",
            "Zone definitions and product assignments",
            "Picker counts per zone",
            "Conveyor and material handling specifications",
        ),
        process_steps=(
            "Release orders into the picking system",
            "Build picking batches for each zone",
            "Simulate pickers working in parallel across zones",
            "Pass containers between zones on conveyors",
            "Track picking rates and zone utilization",
            "Handle packing and order completion",
        ),
        outputs=(
            "Zone-by-zone performance metrics",
            "Picker utilization by zone",
            "Order throughput rates",
            "Bottleneck identification by zone",
            "Recommended picker distribution",
        ),
    )),
    ModelingModule("pallet-ant", ModuleTemplate(
        name="Pallet Ant",
        what_it_does="Simulates automated pallet-moving robots (AMRs) for material transport.",
        prerequisites=(
            "Warehouse layout with travel paths",
            "Pallet storage and workstation locations",
            "Robot specifications (speed, capacity, quantity)",
            "Order/pallet movement requirements",
        ),
        process_steps=(
            "Generate pallet movement tasks",
            "Dispatch robots to pallet locations",
            "Simulate robot navigation and traffic management",
            "Transport pallets to destination workstations",
            "Queue pallets at stations for processing",
            "Handle robot charging and availability",
        ),
        outputs=(
            "Robot fleet size requirements",
            "Travel times and distances",
            "Robot utilization metrics",
            "Station queue times and throughput",
            "Traffic congestion identification",
        ),
    )),
    ModelingModule("pick-to-amr", ModuleTemplate(
        name="Pick to AMR",
        what_it_does="Models picking operations where workers pick from static locations into mobile robots.",
        prerequisites=(
            "Pick face layout and product locations",
            "AMR specifications and quantity",
            "Order data with pick requirements",
            "Picker specifications",
        ),
        process_steps=(
            "Route AMRs to picking zones",
            "Assign orders to AMRs and pickers",
            "Simulate pickers walking to locations and picking into AMR",
            "Navigate AMRs between picking positions",
            "Complete orders and route AMRs to packing/sortation",
            "Manage AMR fleet and traffic",
        ),
        outputs=(
            "Required AMR fleet size",
            "Picker productivity metrics",
            "AMR utilization and idle time",
            "Order completion rates",
            "Zone performance analysis",
        ),
    )),
    ModelingModule("amr-put-wall", ModuleTemplate(
        name="AMR Put-wall",
        what_it_does="Simulates put-wall sortation systems where robots deliver items to be sorted into orders.",
        prerequisites=(
            "Put-wall configuration (number of walls, slots per wall)",
            "Order profiles and volumes",
            "AMR/robot specifications",
            "Product and tote data",
        ),
        process_steps=(
            "Allocate orders to put-wall slots",
            "Build picking batches based on slot assignments",
            "Route robots with picked items to put-walls",
            "Simulate sorting items into order slots",
            "Complete orders and clear slots for new orders",
            "Optimize slot allocation for maximum affinity",
        ),
        outputs=(
            "Put-wall utilization and throughput",
            "Robot requirements and utilization",
            "Order completion times",
            "Slot efficiency metrics",
            "Recommended put-wall configuration",
        ),
    )),
    ModelingModule("pick-path-generator", ModuleTemplate(
        name="Pick Path Generator",
        what_it_does="Calculates optimal routes for pickers walking through warehouse aisles.",
        prerequisites=(
            "Warehouse layout (aisles, bays, breaks)",
            "Pick locations for orders",
            "Travel speed and pick time parameters",
        ),
        process_steps=(
            "Identify all pick locations for an order",
            "Generate possible paths through aisles",
            "Calculate travel distances considering aisle constraints",
            "Solve traveling salesman problem for optimal route",
            "Account for one-way aisles and cross-aisles",
            "Calculate total pick time including travel and handling",
        ),
        outputs=(
            "Optimized pick paths with turn-by-turn routing",
            "Total pick time and distance",
            "Comparison of routing strategies",
            "Pick path visualization",
        ),
    )),
    ModelingModule("layer-gantry", ModuleTemplate(
        name="Layer Gantry",
        what_it_does="Simulates layer-picking operations using overhead gantry cranes for pallet building.",
        prerequisites=(
            "Order data requiring layer picks",
            "Pallet building specifications",
            "Gantry system parameters (speed, capacity, positions)",
            "Product layer configurations",
        ),
        process_steps=(
            "Queue orders requiring layer picks",
            "Allocate source pallets to gantry positions",
            "Simulate gantry crane movements to pick layers",
            "Build order pallets layer-by-layer",
            "Handle pallet rotation and orientation",
            "Track gantry utilization and throughput",
        ),
        outputs=(
            "Throughput capacity (orders/pallets per hour)",
            "Gantry crane utilization metrics",
            "Order completion times",
            "Recommendations for gantry positions and equipment count",
        ),
    )),
)

# Design-hub pages backed by a template, keyed by route path
FEATURE_TEMPLATES: dict[str, ModuleTemplate] = {
    "/data-invalidator": DATA_INVALIDATOR,
    "/data-synthesis": DATA_SYNTHESIS,
    "/capital-expenses": CAPITAL_EXPENSES,
    "/labor-calculator": LABOR_CALCULATOR,
    "/layout-manager": LAYOUT_MANAGER,
    "/modeling": MODELING_OVERVIEW,
}


def modeling_module(slug: str) -> Optional[ModelingModule]:
    return next((m for m in MODELING_MODULES if m.slug == slug), None)


def template_for_path(path: str) -> Optional[ModuleTemplate]:
    """Template for a design-hub route, including ``/modeling/<slug>``."""
    if path in FEATURE_TEMPLATES:
        return FEATURE_TEMPLATES[path]
    prefix = "/modeling/"
    if path.startswith(prefix):
        module = modeling_module(path[len(prefix):])
        return module.template if module else None
    return None
