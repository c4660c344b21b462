# =============================================================================
# core/catalog.py - Static City Catalog
# =============================================================================
# The curated city list behind the listing page, the homepage grid and the
# city detail pages. It is content, not user data: it ships with the app and
# is never written at runtime.
#
# Usage:
#   from core.catalog import CITIES
#   seoul = next(c for c in CITIES if c.slug == "seoul")
# =============================================================================

from core.models.city import City

_CITY_ROWS = [
    {
        "id": "1", "slug": "seoul", "name": "서울", "region": "서울특별시",
        "description": "대한민국의 수도. 강남, 성수, 홍대의 코워킹 스페이스와 끝없는 카페가 있는 메트로폴리스",
        "badge": "popular", "monthly_cost": 2_800_000, "rent_studio": 900_000, "deposit": 10_000_000,
        "internet_speed": 1000, "cafe_count": 2850, "coworking_count": 48,
        "avg_temperature": 12.5, "current_temperature": 3.0, "air_quality": 68,
        "rating": 4.6, "nomad_score": 4.7, "review_count": 412, "like_count": 320, "nomads_now": 156,
    },
    {
        "id": "2", "slug": "busan", "name": "부산", "region": "부산광역시",
        "description": "해운대와 광안리 바다를 보며 일하는 항구 도시. 대도시 인프라와 해변 라이프의 조화",
        "badge": "popular", "monthly_cost": 2_000_000, "rent_studio": 550_000, "deposit": 8_000_000,
        "internet_speed": 1000, "cafe_count": 1050, "coworking_count": 12,
        "avg_temperature": 15.0, "current_temperature": 8.0, "air_quality": 55,
        "rating": 4.3, "nomad_score": 4.4, "review_count": 180, "like_count": 78, "nomads_now": 98,
    },
    {
        "id": "3", "slug": "jeju", "name": "제주", "region": "제주특별자치도",
        "description": "오름과 바다가 있는 섬. 한 달 살기와 워케이션의 성지",
        "badge": "popular", "monthly_cost": 2_200_000, "rent_studio": 600_000, "deposit": 10_000_000,
        "internet_speed": 500, "cafe_count": 520, "coworking_count": 8,
        "avg_temperature": 16.0, "current_temperature": 12.0, "air_quality": 30,
        "rating": 4.7, "nomad_score": 4.8, "review_count": 230, "like_count": 92, "nomads_now": 134,
    },
    {
        "id": "4", "slug": "gangneung", "name": "강릉", "region": "강원도",
        "description": "커피 거리와 동해 바다. 안목해변 카페에서 일하는 여유로운 도시",
        "badge": "rising", "monthly_cost": 1_800_000, "rent_studio": 450_000, "deposit": 5_000_000,
        "internet_speed": 1000, "cafe_count": 320, "coworking_count": 5,
        "avg_temperature": 12.0, "current_temperature": 5.0, "air_quality": 45,
        "rating": 4.5, "nomad_score": 4.7, "review_count": 120, "like_count": 85, "nomads_now": 67,
    },
    {
        "id": "5", "slug": "sokcho", "name": "속초", "region": "강원도",
        "description": "설악산과 동해를 한 번에. 조용한 바닷가 작업 환경",
        "monthly_cost": 1_700_000, "rent_studio": 420_000, "deposit": 5_000_000,
        "internet_speed": 500, "cafe_count": 180, "coworking_count": 2,
        "avg_temperature": 11.5, "current_temperature": 4.0, "air_quality": 35,
        "rating": 4.4, "nomad_score": 4.3, "review_count": 64, "like_count": 41, "nomads_now": 41,
    },
    {
        "id": "6", "slug": "chuncheon", "name": "춘천", "region": "강원도",
        "description": "호수와 산으로 둘러싸인 도시. 서울 근교에서 자연 속 노마드 생활",
        "monthly_cost": 1_600_000, "rent_studio": 400_000, "deposit": 3_000_000,
        "internet_speed": 1000, "cafe_count": 240, "coworking_count": 3,
        "avg_temperature": 11.0, "current_temperature": 1.0, "air_quality": 40,
        "rating": 4.2, "nomad_score": 4.1, "review_count": 52, "like_count": 30, "nomads_now": 28,
    },
    {
        "id": "7", "slug": "yangyang", "name": "양양", "region": "강원도",
        "description": "서핑의 성지. 죽도해변 근처에서 파도와 함께하는 워케이션",
        "badge": "new", "monthly_cost": 1_650_000, "rent_studio": 430_000, "deposit": 3_000_000,
        "internet_speed": 500, "cafe_count": 90, "coworking_count": 2,
        "avg_temperature": 11.8, "current_temperature": 4.5, "air_quality": 25,
        "rating": 4.6, "nomad_score": 4.5, "review_count": 48, "like_count": 57, "nomads_now": 52,
    },
    {
        "id": "8", "slug": "daejeon", "name": "대전", "region": "대전광역시",
        "description": "과학과 교통의 중심. KTX로 어디든 가까운 합리적인 도시",
        "monthly_cost": 1_700_000, "rent_studio": 420_000, "deposit": 5_000_000,
        "internet_speed": 1000, "cafe_count": 610, "coworking_count": 9,
        "avg_temperature": 13.0, "current_temperature": 4.0, "air_quality": 50,
        "rating": 4.1, "nomad_score": 4.0, "review_count": 75, "like_count": 33, "nomads_now": 35,
    },
    {
        "id": "9", "slug": "gwangju", "name": "광주", "region": "광주광역시",
        "description": "예술과 문화의 도시. 맛있는 음식과 낮은 생활비",
        "monthly_cost": 1_650_000, "rent_studio": 400_000, "deposit": 5_000_000,
        "internet_speed": 1000, "cafe_count": 540, "coworking_count": 6,
        "avg_temperature": 14.0, "current_temperature": 6.0, "air_quality": 48,
        "rating": 4.0, "nomad_score": 3.9, "review_count": 58, "like_count": 26, "nomads_now": 24,
    },
    {
        "id": "10", "slug": "jeonju", "name": "전주", "region": "전라북도",
        "description": "한옥마을과 비빔밥의 도시. 전통 속에서 즐기는 슬로우 라이프",
        "monthly_cost": 1_550_000, "rent_studio": 380_000, "deposit": 3_000_000,
        "internet_speed": 500, "cafe_count": 410, "coworking_count": 4,
        "avg_temperature": 13.5, "current_temperature": 5.0, "air_quality": 52,
        "rating": 4.4, "nomad_score": 4.2, "review_count": 88, "like_count": 49, "nomads_now": 39,
    },
    {
        "id": "11", "slug": "yeosu", "name": "여수", "region": "전라남도",
        "description": "밤바다가 아름다운 남해안 도시. 섬과 바다 뷰 작업실",
        "monthly_cost": 1_600_000, "rent_studio": 390_000, "deposit": 3_000_000,
        "internet_speed": 500, "cafe_count": 230, "coworking_count": 2,
        "avg_temperature": 15.0, "current_temperature": 7.0, "air_quality": 38,
        "rating": 4.3, "nomad_score": 4.1, "review_count": 46, "like_count": 37, "nomads_now": 31,
    },
    {
        "id": "12", "slug": "gyeongju", "name": "경주", "region": "경상북도",
        "description": "천년 고도. 황리단길 카페와 유적지 산책",
        "monthly_cost": 1_500_000, "rent_studio": 370_000, "deposit": 3_000_000,
        "internet_speed": 500, "cafe_count": 260, "coworking_count": 2,
        "avg_temperature": 13.8, "current_temperature": 6.0, "air_quality": 42,
        "rating": 4.2, "nomad_score": 4.0, "review_count": 39, "like_count": 29, "nomads_now": 22,
    },
    {
        "id": "13", "slug": "jinju", "name": "진주", "region": "경상남도",
        "description": "남강과 진주성이 있는 조용한 도시. 가장 저렴한 생활비",
        "monthly_cost": 1_450_000, "rent_studio": 350_000, "deposit": 2_000_000,
        "internet_speed": 500, "cafe_count": 190, "coworking_count": 1,
        "avg_temperature": 14.2, "current_temperature": 6.5, "air_quality": 44,
        "rating": 4.0, "nomad_score": 3.8, "review_count": 21, "like_count": 15, "nomads_now": 18,
    },
    {
        "id": "14", "slug": "suwon", "name": "수원", "region": "경기도",
        "description": "화성 성곽 아래 행궁동 카페 골목. 서울 접근성 좋은 경기 남부 거점",
        "monthly_cost": 2_100_000, "rent_studio": 600_000, "deposit": 10_000_000,
        "internet_speed": 1000, "cafe_count": 720, "coworking_count": 11,
        "avg_temperature": 12.3, "current_temperature": 2.5, "air_quality": 62,
        "rating": 4.1, "nomad_score": 4.0, "review_count": 67, "like_count": 34, "nomads_now": 45,
    },
    {
        "id": "15", "slug": "incheon", "name": "인천", "region": "수도권",
        "description": "공항 옆 바다 도시. 송도 국제도시의 깔끔한 업무 환경",
        "monthly_cost": 2_300_000, "rent_studio": 650_000, "deposit": 10_000_000,
        "internet_speed": 1000, "cafe_count": 880, "coworking_count": 14,
        "avg_temperature": 12.0, "current_temperature": 2.0, "air_quality": 66,
        "rating": 4.0, "nomad_score": 3.9, "review_count": 55, "like_count": 27, "nomads_now": 37,
    },
]

CITIES: tuple[City, ...] = tuple(
    City(thumbnail=f"/images/{row['slug']}.jpg", **row) for row in _CITY_ROWS
)
