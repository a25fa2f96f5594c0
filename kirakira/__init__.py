async def setup(bot):
    from .kirakira import KiraKira

    await bot.add_cog(KiraKira(bot))
