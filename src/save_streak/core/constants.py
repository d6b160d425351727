"""
Constantes globales del sistema.

Este módulo centraliza los valores mágicos y thresholds usados
por el motor de rachas y los mensajes de motivación.
"""

# ============================================================================
# MOTOR DE RACHAS
# ============================================================================

# Día de inicio de semana (date.weekday(): 0=lunes ... 6=domingo)
WEEK_START_DAY = 6

# Límite de búsqueda hacia atrás al calcular la racha actual
STREAK_LOOKBACK_DAYS = 365

# Rachas que disparan una celebración
DEFAULT_STREAK_MILESTONES = (7, 30, 100)

# ============================================================================
# CONTRIBUCIONES
# ============================================================================

# Monto máximo por contribución en centavos (un billón de centavos = $10,000,000,000.00)
# Mantiene los totales dentro de un entero de 64 bits para historiales realistas
MAX_CONTRIBUTION_CENTS = 1_000_000_000_000

# Días de historial reciente mostrados por defecto
RECENT_HISTORY_DAYS = 30

# ============================================================================
# MOTIVACIÓN Y ALERTAS DE PLAZO
# ============================================================================

HALFWAY_PROGRESS = 0.5
ALMOST_THERE_PROGRESS = 0.9

# Racha a partir de la cual el usuario está "on fire"
ON_FIRE_STREAK = 7

# Días restantes para mostrar el mensaje de empuje final
FINAL_PUSH_DAYS = 7

# Puntos porcentuales de atraso respecto al cronograma lineal
BEHIND_SCHEDULE_TOLERANCE = 15
