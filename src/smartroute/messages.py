"""User-facing labels and messages (Thai locale)."""

DEPOT_LABEL = "คลังสินค้า (Start)"
STOP_LABEL_PREFIX = "จุดส่งสินค้า"
IMPORTED_STOP_LABEL_PREFIX = "จุดส่ง"
UNKNOWN_CUSTOMER = "Unknown"
UNRESOLVED_SUFFIX = "(ไม่พบพิกัด)"

DEPOT_ZONE = "HQ"
DEFAULT_ZONE = "ทั่วไป"
UNRESOLVED_ZONE = "Unresolved"

DEPOT_GROUP = "คลังสินค้า"
ROUTE_GROUP = "เส้นทางจัดส่ง"

STOP_LIMIT_REACHED = "เพิ่มจุดส่งได้สูงสุด {limit} จุด เพื่อประสิทธิภาพสูงสุด"
STOP_NOT_FOUND = "ไม่พบจุดส่งสินค้า {stop_id}"
NOT_ENOUGH_STOPS = "ต้องมีจุดส่งสินค้าอย่างน้อย 2 จุดเพื่อคำนวณเส้นทาง"
RESET_CONFIRMATION = "ยืนยันการล้างข้อมูลจุดส่งทั้งหมด?"
CALCULATION_BUSY = "กำลังคำนวณเส้นทางอยู่ กรุณารอสักครู่"
IMPORT_BUSY = "กำลังนำเข้าข้อมูลอยู่ กรุณารอสักครู่"

OPTIMIZATION_FAILED = "ไม่สามารถคำนวณเส้นทางได้: {reason}"
OPTIMIZATION_FALLBACK_REASON = "เกิดข้อผิดพลาดจากระบบ AI"
IMPORT_FAILED = "การนำเข้าข้อมูลล้มเหลว: {reason}"
NO_ORDERS_FOUND = "ไม่พบข้อมูลออเดอร์ในข้อความ"

IMPORT_STATUS_PARSING = "กำลังวิเคราะห์ข้อมูลด้วย AI..."
IMPORT_STATUS_GEOCODING = "กำลังค้นหาพิกัด {count} รายการ..."
IMPORT_STATUS_PROGRESS = "กำลังค้นหาพิกัด {index}/{count}..."

ARRIVED_AT_STOP = "ถึงจุดส่งสินค้าที่ {number}"
