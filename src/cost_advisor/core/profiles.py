"""
profiles.py - Perfiles por arquetipo de negocio (v1.2)

Una estructura inmutable por arquetipo con:
- Campos del formulario (FieldSpec)
- Bandas de coherencia y pesos de completitud
- Reglas de alertas
- Rangos de benchmark
- Plantillas de recomendaciones

Las bandas y penalizaciones son parámetros de negocio ajustables,
se conservan tal como se usan en producción.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from .config import (
    AlertRule,
    ArchetypeProfile,
    BenchmarkSpec,
    CoherenceRule,
    FieldSpec,
    Ladder,
    PriorityTemplate,
    StrategicItem,
    DEFAULT_EXPERIENCE,
    EXPERIENCE_LEVELS,
)


# ============================================================
# Manufactura
# ============================================================

MANUFACTURING = ArchetypeProfile(
    key="manufactura",
    name="manufactura",
    fields=(
        FieldSpec("materials", "Materias primas", required=True, warn_above=5_000_000,
                  indicator="Materias Primas", icon="fa-boxes", color="orange"),
        FieldSpec("labor", "Mano de obra", required=True, warn_above=4_000_000,
                  indicator="Mano de Obra", icon="fa-users", color="blue"),
        FieldSpec("packaging", "Empaque y presentación", warn_above=500_000,
                  indicator="Empaque", icon="fa-cube", color="green"),
        FieldSpec("overhead", "Gastos indirectos", warn_above=5_000_000,
                  indicator="Gastos Indirectos", icon="fa-building", color="purple"),
    ),
    coherence_rules=(
        CoherenceRule(("materials",), 0.2, low=0.3, high=0.7),
        CoherenceRule(("labor",), 0.15, low=0.1, high=0.5),
        CoherenceRule(("packaging",), 0.1, high=0.2),
        CoherenceRule(("overhead",), 0.2, source="zero"),
    ),
    completeness_weights=(
        ("materials", 0.4), ("labor", 0.3), ("packaging", 0.2), ("overhead", 0.1),
    ),
    alert_rules=(
        AlertRule(
            "materials", ">", 0.7, "warning", "Materias Primas Muy Altas",
            "{pct}% del costo son materias primas (óptimo: 40-60%)",
            "Considera negociar precios con proveedores o buscar alternativas",
        ),
        AlertRule(
            "materials", "<", 0.3, "info", "Materias Primas Bajas",
            "Solo {pct}% son materias primas. Verifica si incluiste todos los componentes",
            "Revisa si faltan materiales en el cálculo",
        ),
        AlertRule(
            "labor", ">", 0.5, "danger", "Mano de Obra Excesiva",
            "{pct}% del costo es mano de obra (recomendado: 15-35%)",
            "Evalúa automatización o optimización de procesos",
        ),
    ),
    benchmarks=(
        BenchmarkSpec(
            metric="Ratio Materias Primas",
            source="share:materials",
            display="pct",
            industry_range="40-60%",
            status=Ladder((("good", 40, 60), ("average", 30, 70)), "poor"),
            comparison=Ladder((("Óptimo", 40, 60), ("Alto", 60, None)), "Bajo"),
            advice=(
                "Mantener la proporción actual",
                "Ajustar la proporción hacia 40-60%",
                "Renegociar proveedores o revisar materiales incluidos",
            ),
        ),
        BenchmarkSpec(
            metric="Ratio Mano de Obra",
            source="share:labor",
            display="pct",
            industry_range="15-35%",
            status=Ladder((("good", 15, 35), ("average", 10, 45)), "poor"),
            comparison=Ladder((("Óptimo", 15, 35), ("Alto", 35, None)), "Bajo"),
            advice=(
                "Mantener la productividad actual",
                "Medir productividad por operario",
                "Evaluar automatización de procesos",
            ),
        ),
        BenchmarkSpec(
            metric="Margen Manufactura",
            source=None,
            display="text",
            industry_range="50%",
            status=Ladder((), "good"),
            comparison=Ladder((), "Estándar Industria"),
            advice=(
                "El precio óptimo aplica el margen estándar de 50%",
                "El precio óptimo aplica el margen estándar de 50%",
                "El precio óptimo aplica el margen estándar de 50%",
            ),
            fixed_value="50%",
        ),
    ),
    priority=(
        PriorityTemplate(
            "Optimizar costo de materia prima",
            "45-55%",
            (
                "Negociar con 3-5 proveedores diferentes",
                "Evaluar compras por volumen (descuentos 10-15%)",
                "Buscar materiales alternativos de calidad similar",
                "Implementar sistema de inventario justo a tiempo",
            ),
        ),
        PriorityTemplate(
            "Automatizar procesos de producción",
            "25-35%",
            (
                "Identificar tareas repetitivas para automatizar",
                "Invertir en maquinaria semi-automática",
                "Capacitar personal en nuevas tecnologías",
                "Medir productividad por operario",
            ),
        ),
    ),
    strategic=(
        StrategicItem("Escalar producción", "Aumentar volumen para reducir costos unitarios",
                      "Reducción 20-30% costo unitario", "Media-Alta", "6-12 meses"),
        StrategicItem("Integración vertical", "Control directo de la cadena de suministro",
                      "Reducción 15-25% costos materiales", "Alta", "12-18 meses"),
        StrategicItem("Diversificación de productos", "Aprovechar capacidad instalada",
                      "Aumento 25-40% ingresos", "Media", "3-6 meses"),
    ),
)


# ============================================================
# Reventa
# ============================================================

RESALE = ArchetypeProfile(
    key="reventa",
    name="reventa",
    fields=(
        FieldSpec("purchase_cost", "Costo de compra", required=True,
                  aliases=("purchaseCost", "purchase"),
                  indicator="Costo de Compra", icon="fa-shopping-cart", color="green"),
        FieldSpec("logistics_pct", "Logística", max=100,
                  aliases=("logisticsPct", "logistics"),
                  indicator="Logística", icon="fa-truck", color="blue"),
        FieldSpec("storage", "Almacenamiento",
                  indicator="Almacenamiento", icon="fa-warehouse", color="indigo"),
        FieldSpec("desired_margin_pct", "Margen", required=True, min=1, max=200, default=30,
                  aliases=("desiredMarginPct", "margin"),
                  range_message="Margen debe estar entre 1% y 200%",
                  indicator="Margen Definido", icon="fa-percentage", color="yellow"),
    ),
    coherence_rules=(
        CoherenceRule(("purchase",), 0.2, low=0.4, high=0.8),
        CoherenceRule(("logistics_pct",), 0.15, source="input", low=2, high=15),
        CoherenceRule(("desired_margin_pct",), 0.2, source="input", low=10, high=100),
    ),
    completeness_weights=(
        ("purchase_cost", 0.6), ("logistics_pct", 0.2), ("storage", 0.1),
        ("desired_margin_pct", 0.1),
    ),
    alert_rules=(
        AlertRule(
            "purchase", ">", 0.8, "warning", "Costo de Compra Alto",
            "{pct}% del total es costo de compra (óptimo: 50-70%)",
            "Busca mejores precios de proveedores o aumenta el margen",
        ),
        AlertRule(
            "purchase", "<", 0.4, "info", "Margen Muy Alto",
            "El costo de compra es solo {pct}% del total",
            "Verifica si el precio de venta es competitivo en el mercado",
        ),
    ),
    benchmarks=(
        BenchmarkSpec(
            metric="Costo vs Precio",
            source="share:purchase",
            display="pct",
            industry_range="50-70%",
            status=Ladder((("good", 50, 70), ("average", None, 80)), "poor"),
            comparison=Ladder((("Saludable", 50, 70), ("Alto", 70, None)), "Excelente"),
            advice=(
                "Mantener la relación costo/precio",
                "Vigilar precios de proveedores",
                "Negociar precios de compra",
            ),
        ),
        BenchmarkSpec(
            metric="Margen Reventa",
            source="input:desired_margin_pct",
            display="pct",
            industry_range="25-50%",
            status=Ladder((("good", 20, None), ("average", 10, None)), "poor"),
            comparison=Ladder((("Competitivo", 25, 50), ("Premium", 50, None)), "Bajo"),
            advice=(
                "Mantener el margen",
                "Evaluar un margen de al menos 20%",
                "Aumentar el margen o reducir costos de compra",
            ),
        ),
        BenchmarkSpec(
            metric="Logística",
            source="input:logistics_pct",
            display="pct",
            industry_range="0-8%",
            status=Ladder((("good", None, 8), ("average", None, 15)), "poor"),
            comparison=Ladder((("Eficiente", None, 10),), "Alto"),
            advice=(
                "Mantener la operación logística",
                "Consolidar envíos y rutas",
                "Renegociar transporte u optimizar rutas",
            ),
        ),
    ),
    priority=(
        PriorityTemplate(
            "Negociar mejores precios de compra",
            "60-70%",
            (
                "Consolidar compras con menos proveedores",
                "Negociar descuentos por volumen anual",
                "Buscar proveedores directos (eliminar intermediarios)",
                "Evaluar importación directa para productos clave",
            ),
        ),
        PriorityTemplate(
            "Optimizar rotación de inventario",
            "8-12%",
            (
                "Implementar sistema ABC de inventarios",
                "Establecer puntos de reorden automático",
                "Liquidar productos de baja rotación",
                "Negociar consignación con proveedores",
            ),
        ),
    ),
    strategic=(
        StrategicItem("Marca propia (Private Label)", "Desarrollar productos con mayor margen",
                      "Aumento 40-60% margen bruto", "Media", "6-9 meses"),
        StrategicItem("E-commerce y omnicanalidad", "Expandir canales de venta digitales",
                      "Aumento 30-50% ventas", "Media", "3-6 meses"),
        StrategicItem("Distribución mayorista", "Vender a otros retailers",
                      "Aumento 25-40% volumen", "Baja-Media", "2-4 meses"),
    ),
)


# ============================================================
# Servicio profesional
# ============================================================

SERVICE = ArchetypeProfile(
    key="servicio",
    name="servicio",
    fields=(
        FieldSpec("hourly_rate", "Valor por hora", required=True,
                  aliases=("hourlyRate",),
                  indicator="Tarifa Horaria", icon="fa-clock", color="blue"),
        FieldSpec("project_hours", "Horas por proyecto", required=True,
                  aliases=("projectHours",),
                  indicator="Duración Proyecto", icon="fa-calendar", color="purple"),
        FieldSpec("operational_cost", "Gastos operativos",
                  aliases=("operationalCost", "operational"),
                  indicator="Gastos Operativos", icon="fa-cogs", color="gray"),
        FieldSpec("experience_level", "Nivel de experiencia", kind="choice",
                  default=DEFAULT_EXPERIENCE, choices=tuple(EXPERIENCE_LEVELS),
                  aliases=("experienceLevel", "experience"),
                  indicator="Nivel Experiencia", icon="fa-award", color="yellow"),
    ),
    coherence_rules=(
        CoherenceRule(("hourly_value",), 0.3, low=0.4),
        CoherenceRule(("hourly_rate",), 0.2, source="input", low=10_000, high=200_000),
        CoherenceRule(("project_hours",), 0.15, source="input", low=1, high=200),
    ),
    completeness_weights=(
        ("hourly_rate", 0.4), ("project_hours", 0.3), ("operational_cost", 0.2),
        ("experience_level", 0.1),
    ),
    alert_rules=(
        AlertRule(
            "hourly_value", "<", 0.4, "warning", "Valor Hora Bajo",
            "El valor por hora representa solo {pct}% del precio total",
            "Considera aumentar tu tarifa horaria o reducir gastos operativos",
        ),
        AlertRule(
            "project_hours", ">", 80, "info", "Proyecto Extenso",
            "{value} horas por proyecto es considerable",
            "Evalúa dividir en fases o cobrar por hitos",
            source="input",
        ),
    ),
    benchmarks=(
        BenchmarkSpec(
            metric="Tarifa Horaria",
            source="input:hourly_rate",
            display="money",
            industry_range="$30.000-$150.000",
            status=Ladder((("good", 50_000, None), ("average", 25_000, None)), "poor"),
            comparison=Ladder(
                (("Premium", 150_000, None), ("Senior", 80_000, None), ("Intermedio", 30_000, None)),
                "Junior",
            ),
            advice=(
                "Tarifa competitiva, documentar el valor agregado",
                "Implementar aumentos graduales de tarifa",
                "Investigar tarifas de la competencia y subir el valor hora",
            ),
        ),
        BenchmarkSpec(
            metric="Valor Proyecto",
            source="component:hourly_value",
            display="money",
            industry_range="$200.000-$500.000",
            status=Ladder((("good", 500_000, None), ("average", 150_000, None)), "poor"),
            comparison=Ladder((("Alto Valor", 500_000, None), ("Medio", 200_000, None)), "Básico"),
            advice=(
                "Mantener el alcance de los proyectos",
                "Ofrecer paquetes de valor con servicios premium",
                "Redefinir el alcance o la tarifa del proyecto",
            ),
        ),
        BenchmarkSpec(
            metric="Eficiencia",
            source="input:project_hours",
            display="hours",
            industry_range="20-80h",
            status=Ladder((("good", None, 40), ("average", None, 100)), "poor"),
            comparison=Ladder((("Ágil", None, 20), ("Normal", None, 80)), "Extenso"),
            advice=(
                "Mantener la duración de los proyectos",
                "Estandarizar metodologías y plantillas",
                "Dividir en fases o cobrar por hitos",
            ),
        ),
    ),
    priority=(
        PriorityTemplate(
            "Aumentar tarifa por hora",
            "65-75%",
            (
                "Investigar tarifas de competencia en el mercado",
                "Documentar valor agregado y especialización",
                "Implementar aumentos graduales (15-20% cada 6 meses)",
                "Ofrecer paquetes de valor con servicios premium",
            ),
        ),
        PriorityTemplate(
            "Automatizar procesos repetitivos",
            "25-35%",
            (
                "Identificar tareas que consumen más tiempo",
                "Implementar templates y metodologías estándar",
                "Usar herramientas de automatización",
                "Delegar tareas operativas a junior staff",
            ),
        ),
    ),
    strategic=(
        StrategicItem("Servicios recurrentes", "Crear contratos mensuales/anuales",
                      "Ingresos predecibles +40%", "Baja", "1-3 meses"),
        StrategicItem("Especialización premium", "Enfocarse en nicho de alto valor",
                      "Aumento tarifas 50-100%", "Media", "6-12 meses"),
        StrategicItem("Equipo y subcontratación", "Escalar con recursos adicionales",
                      "Capacidad 3x-5x actual", "Alta", "6-18 meses"),
    ),
)


# ============================================================
# Servicio híbrido (servicio + productos)
# ============================================================

HYBRID = ArchetypeProfile(
    key="hibrido",
    name="híbrido",
    fields=(
        FieldSpec("professional_rate", "Valor hora profesional", required=True,
                  aliases=("professionalRate",),
                  indicator="Tarifa Profesional", icon="fa-user-tie", color="blue"),
        FieldSpec("client_hours", "Horas por cliente", required=True,
                  aliases=("clientHours",),
                  indicator="Horas Cliente", icon="fa-clock", color="indigo"),
        FieldSpec("products_cost", "Costo de productos", required=True,
                  aliases=("productsCost", "products"),
                  indicator="Costo Productos", icon="fa-box", color="green"),
        FieldSpec("additional_cost", "Gastos adicionales", warn_above=1_000_000,
                  aliases=("additionalCost", "additional"),
                  indicator="Gastos Adicionales", icon="fa-plus-circle", color="orange"),
    ),
    coherence_rules=(
        CoherenceRule(("service",), 0.2, low=0.2, high=0.8),
        CoherenceRule(("products",), 0.2, low=0.1, high=0.7),
        CoherenceRule(("service", "products"), 0.3, source="zero"),
    ),
    completeness_weights=(
        ("professional_rate", 0.3), ("client_hours", 0.2), ("products_cost", 0.3),
        ("additional_cost", 0.2),
    ),
    alert_rules=(
        AlertRule(
            "service", "<", 0.2, "warning", "Componente Servicio Bajo",
            "Los servicios son solo {pct}% del precio",
            "Aumenta el valor del componente profesional",
        ),
        AlertRule(
            "products", ">", 0.7, "info", "Orientado a Productos",
            "Los productos representan {pct}% del total",
            "Considera si realmente necesitas el modelo híbrido",
        ),
    ),
    benchmarks=(
        BenchmarkSpec(
            metric="Balance Servicio",
            source="share:service",
            display="pct",
            industry_range="30-70%",
            status=Ladder((("good", 25, 75),), "average"),
            comparison=Ladder((("Balanceado", 30, 70), ("Pro Servicio", 70, None)), "Pro Producto"),
            advice=(
                "Mantener el balance servicio/producto",
                "Ajustar la proporción producto/servicio por proyecto",
                "Ajustar la proporción producto/servicio por proyecto",
            ),
        ),
        BenchmarkSpec(
            metric="Valor Total",
            source="total",
            display="money",
            industry_range="$400.000-$800.000",
            status=Ladder((("good", 600_000, None), ("average", 300_000, None)), "poor"),
            comparison=Ladder((("Premium", 800_000, None), ("Medio", 400_000, None)), "Básico"),
            advice=(
                "Mantener el valor por cliente",
                "Crear paquetes estándar balanceados",
                "Aumentar el valor entregado por cliente",
            ),
        ),
        BenchmarkSpec(
            metric="Complejidad",
            source=None,
            display="text",
            industry_range="Modelo Avanzado",
            status=Ladder((), "good"),
            comparison=Ladder((), "Modelo Avanzado"),
            advice=(
                "Medir rentabilidad por componente",
                "Medir rentabilidad por componente",
                "Medir rentabilidad por componente",
            ),
            fixed_value="Híbrido",
        ),
    ),
    priority=(
        PriorityTemplate(
            "Balancear componente servicio-producto",
            "40-60% / 40-60%",
            (
                "Evaluar rentabilidad de cada componente",
                "Ajustar proporción producto/servicio por proyecto",
                "Crear paquetes estándar balanceados",
                "Medir satisfacción cliente por componente",
            ),
        ),
        PriorityTemplate(
            "Optimizar márgenes por componente",
            "Optimizado",
            (
                "Calcular margen individual de productos vs servicios",
                "Identificar componente más rentable",
                "Ajustar precios por valor percibido",
                "Crear ofertas bundled con alta rentabilidad",
            ),
        ),
    ),
    strategic=(
        StrategicItem("Paquetes productizados", "Crear ofertas estándar producto+servicio",
                      "Aumento eficiencia 35%", "Media", "3-6 meses"),
        StrategicItem("Escalamiento modular", "Componentes intercambiables según cliente",
                      "Flexibilidad +50%, margen +25%", "Media-Alta", "6-9 meses"),
        StrategicItem("Suscripciones híbridas", "Servicios recurrentes + productos bajo demanda",
                      "Ingresos predecibles +60%", "Alta", "9-12 meses"),
    ),
)


# ============================================================
# Paquete / combo
# ============================================================

PACKAGE = ArchetypeProfile(
    key="paquete",
    name="paquete",
    fields=(
        FieldSpec("components_cost", "Costo de componentes", required=True,
                  aliases=("componentsCost",),
                  indicator="Componentes", icon="fa-boxes", color="green"),
        FieldSpec("items_count", "Número de items", required=True, min=1,
                  aliases=("itemsCount",),
                  indicator="Items del Paquete", icon="fa-list-ol", color="blue"),
        FieldSpec("presentation_cost", "Empaque y presentación",
                  aliases=("presentationCost", "presentation"),
                  indicator="Presentación", icon="fa-gift", color="purple"),
        FieldSpec("discount_pct", "Descuento del paquete", max=100,
                  aliases=("discountPct", "discount"),
                  indicator="Descuento", icon="fa-tags", color="yellow"),
    ),
    completeness_weights=(
        ("components_cost", 0.4), ("items_count", 0.3), ("presentation_cost", 0.2),
        ("discount_pct", 0.1),
    ),
)


# ============================================================
# Recomendaciones genéricas (arquetipo sin plantilla propia)
# ============================================================

GENERIC_PRIORITY = PriorityTemplate(
    "Optimizar estructura de costos",
    "Optimizado",
    (
        "Analizar cada componente de costo",
        "Identificar oportunidades de reducción",
        "Implementar controles de costos",
        "Monitorear resultados mensualmente",
    ),
)

GENERIC_STRATEGIC = StrategicItem(
    "Análisis detallado por tipo de negocio",
    "Definir categoría específica para recomendaciones precisas",
    "Recomendaciones personalizadas",
    "Baja",
    "Inmediato",
)

GENERIC_BENCHMARK = BenchmarkSpec(
    metric="Eficiencia General",
    source=None,
    display="text",
    industry_range="Variable",
    status=Ladder((), "average"),
    comparison=Ladder((), "Evaluando"),
    advice=("Análisis detallado", "Análisis detallado", "Análisis detallado"),
    fixed_value="Por determinar",
)


PROFILES: Mapping[str, ArchetypeProfile] = MappingProxyType({
    profile.key: profile
    for profile in (MANUFACTURING, RESALE, SERVICE, HYBRID, PACKAGE)
})


def get_profile(key: str) -> Optional[ArchetypeProfile]:
    """Perfil por clave de arquetipo ("manufactura", ...)"""
    return PROFILES.get(key)
