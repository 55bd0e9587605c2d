SCHEMES = {
    "kerala": [
        {
            "name": "Krishi Bhavan Support",
            "eligibility": "All farmers",
            "benefit": "Free consultation",
        },
        {
            "name": "Organic Farming Subsidy",
            "eligibility": "Small farmers",
            "benefit": "50% subsidy on organic inputs",
        },
        {
            "name": "Crop Insurance",
            "eligibility": "All farmers",
            "benefit": "Weather risk coverage",
        },
    ],
}
