"""Render tracking outcomes as Telegram HTML text blocks."""

from datetime import datetime
from html import escape

from tracking.models import SummaryState, TrackingSummary
from tracking.timefmt import format_short, to_display_zone


def render_summary(
    summary: TrackingSummary,
    display_timezone: str = "America/Mexico_City",
    now: datetime | None = None,
) -> str:
    """Format a summary for the chat user."""
    number = escape(summary.tracking_number)

    if summary.state == SummaryState.NO_INFO:
        return (
            "📦 <b>Paquete encontrado pero sin información</b>\n\n"
            f"🔍 Número: <code>{number}</code>\n"
            "⚠️ No hay información de tracking disponible.\n\n"
            "Intenta nuevamente más tarde."
        )

    if summary.state == SummaryState.NO_EVENTS:
        return (
            "📦 <b>Paquete encontrado pero sin eventos</b>\n\n"
            f"🏢 <b>Paquetería:</b> {escape(summary.carrier_name)}\n"
            f"🔍 Número: <code>{number}</code>\n"
            "⚠️ No hay información de seguimiento disponible aún.\n\n"
            "Intenta nuevamente más tarde."
        )

    if summary.state == SummaryState.PARTIAL:
        return (
            "📦 <b>Información básica</b>\n\n"
            f"🔍 Número: <code>{number}</code>\n"
            f"🏢 Paquetería: {escape(summary.carrier_name)}\n"
            "✅ Paquete encontrado en el sistema\n"
            "⚠️ Error procesando detalles completos\n\n"
            "Intenta nuevamente o contacta soporte."
        )

    lines = [
        "📦 <b>Información del Paquete</b>",
        "",
        f"🏢 <b>Paquetería:</b> {escape(summary.carrier_name)}",
        f"🔍 <b>Guía:</b> <code>{number}</code>",
        "",
        f"📍 <b>Estado actual:</b> {escape(summary.status or '')}",
        f"🌍 <b>Ubicación:</b> {escape(summary.location or '')}",
        f"📅 <b>Último evento:</b> {escape(summary.last_event_time or 'Fecha no disponible')}",
        f"📝 <b>Descripción:</b> {escape(summary.description or '')}",
        "",
        f"🚚 <b>Entrega estimada:</b> {escape(summary.estimated_delivery or 'No disponible')}",
    ]
    if summary.carrier_contact:
        lines.append(f"📞 <b>Contacto:</b> {escape(summary.carrier_contact)}")

    if len(summary.history) > 1:
        lines += ["", "📋 <b>Historial reciente:</b>"]
        for entry in summary.history:
            lines += [
                "",
                f"• <b>{escape(entry.timestamp)}</b>",
                f"📍 {escape(entry.location)}",
                f"📝 {escape(entry.description)}",
            ]

    consulted = to_display_zone(now or datetime.now().astimezone(), display_timezone)
    lines += ["", f"⏰ <i>Consultado: {format_short(consulted)}</i>"]
    return "\n".join(lines)


def render_not_found(tracking_number: str) -> str:
    return (
        "📦 <b>Número registrado pero sin información disponible</b>\n\n"
        f"🔍 Número de guía: <code>{escape(tracking_number)}</code>\n\n"
        "El número fue registrado en el sistema, pero puede necesitar más tiempo "
        "para mostrar información de seguimiento.\n\n"
        "💡 Intenta nuevamente en 5-10 minutos."
    )


def render_searching(tracking_number: str) -> str:
    return (
        f"🔍 Buscando información del paquete: <code>{escape(tracking_number)}</code>\n\n"
        "Espera un momento..."
    )


INVALID_NUMBER_MESSAGE = "❌ Número de guía inválido. Debe tener al menos 8 caracteres."
GENERIC_ERROR_MESSAGE = "⚠️ Ocurrió un error procesando tu solicitud. Intenta nuevamente."
UNRECOGNIZED_MESSAGE = "❓ Comando no reconocido. Usa /help para ver los comandos disponibles."


def render_welcome(first_name: str) -> str:
    return (
        f"👋 ¡Hola {escape(first_name)}!\n\n"
        "🚚 <b>Bot de Tracking de Paquetes</b>\n\n"
        "Puedo ayudarte a rastrear tus paquetes de DHL y otras paqueterías.\n\n"
        "<b>Comandos disponibles:</b>\n"
        "• /track NUMERO_GUIA - Rastrear un paquete\n"
        "• /help - Mostrar ayuda\n\n"
        "<b>Ejemplo:</b>\n"
        "<code>/track 5532417763</code>\n\n"
        "¡Envíame un número de guía para comenzar! 📦"
    )


HELP_MESSAGE = (
    "🆘 <b>Ayuda - Bot de Tracking</b>\n\n"
    "<b>Comandos:</b>\n"
    "• <code>/start</code> - Iniciar el bot\n"
    "• <code>/track NUMERO</code> - Rastrear paquete\n"
    "• <code>/help</code> - Mostrar esta ayuda\n\n"
    "<b>Formas de rastrear:</b>\n"
    "• <code>/track 5532417763</code>\n"
    "• Enviar solo el número: <code>5532417763</code>\n\n"
    "<b>Paqueterías soportadas:</b>\n"
    "• DHL Express\n"
    "• FedEx\n"
    "• UPS\n"
    "• Y muchas más...\n\n"
    "💡 <b>Tip:</b> Solo envía el número de guía y yo me encargo del resto."
)
