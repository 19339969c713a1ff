# run.py
import uvicorn

# Start the comparator API. Requires GROQ_API_KEY in the environment or .env.
if __name__ == "__main__":
    uvicorn.run(
        "comparator.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
